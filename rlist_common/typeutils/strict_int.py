def strict_int(name: str, value: object) -> int:
    """
    Perform a shallow runtime check that a value is a plain integer.

    `bool` is a subclass of `int` in Python, which means `isinstance(True, int)` holds. Indexes
    and counts passed as booleans are almost always a bug at the call site, so they are rejected
    here as well.

    Args:
        name (str):
            The name of the argument being checked, used in the error message.
        value (object):
            The value to check.

    Returns:
        int:
            The value, unchanged, if it is an integer.

    Raises:
        TypeError:
            If the value is not an `int`, or is a `bool`.

    Example:
        >>> strict_int("index", 3)
        3

        >>> strict_int("index", "3")
        TypeError: strict_int failed: index must be int, got str
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"strict_int failed: {name} must be int, got {type(value).__name__}"
        )
    return value
