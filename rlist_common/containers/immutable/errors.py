class RListError(Exception):
    """
    Base class for all errors raised by `RList` operations.
    """


class EmptyListAccessError(RListError, LookupError):
    """
    Raised when the head or the tail of the empty list is requested.
    """

    def __init__(self, operation: str):
        super().__init__(f"{operation} of empty list")
        self.operation = operation


class InvalidIndexError(RListError, IndexError):
    """
    Raised when an index is negative or does not resolve to an element.

    Attributes:
        index (int):
            The offending index.
    """

    def __init__(self, index: int):
        super().__init__(f"Index {index} out of bounds")
        self.index = index


class InvalidSampleSizeError(RListError, ValueError):
    """
    Raised when a positive number of elements is sampled from the empty list.

    Attributes:
        size (int):
            The requested sample size.
    """

    def __init__(self, size: int):
        super().__init__(f"Cannot draw {size} element(s) from an empty list")
        self.size = size
