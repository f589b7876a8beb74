from __future__ import annotations
from abc import abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, ClassVar, Final, Generic, Never, TypeVar, overload
import numpy as np

from rlist_common.containers.immutable.errors import (
    EmptyListAccessError,
    InvalidIndexError,
    InvalidSampleSizeError,
)
from rlist_common.typeutils.strict_int import strict_int

T_co = TypeVar("T_co", covariant=True)
S = TypeVar("S")


class RList(Sequence[T_co], Generic[T_co]):
    """
    An immutable, singly-linked list with two variants: `RNil` (the empty list) and `Cons`
    (an element followed by the rest of the list).

    Lists are never modified after construction, so tails are shared freely between lists.
    Prepending is O(1) and returns a new list that reuses the receiver as its tail.

    Every operation that walks the list is an explicit loop rather than a recursive call, so
    lists of any length can be processed without hitting the interpreter recursion limit.
    Operations that produce a list accumulate their result in reverse and reverse it once at
    the end.

    The variant set is closed: `RList` cannot be subclassed outside of this module.

    `lst[i]` accepts negative indexes counted from the end, like a Python list; `at` does not.

    Example:
        >>> lst = RList.of(1, 2, 3)
        >>> lst.prepend(0)
        RList([0, 1, 2, 3])
        >>> lst.map(lambda x: x * 2).filter(lambda x: x > 2)
        RList([4, 6])
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"{cls.__name__}: RList only has the variants Cons and RNil")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    @abstractmethod
    def head(self) -> T_co:
        """
        The first element of the list.

        Raises:
            EmptyListAccessError: If the list is empty.
        """

    @property
    @abstractmethod
    def tail(self) -> RList[T_co]:
        """
        The list without its first element.

        Raises:
            EmptyListAccessError: If the list is empty.
        """

    @abstractmethod
    def is_empty(self) -> bool:
        """
        Returns True for the empty list.
        """

    @classmethod
    def from_sequence(cls, iterable: Iterable[S]) -> RList[S]:
        """
        Builds a list holding the elements of a finite iterable, in iteration order.

        Args:
            iterable (Iterable[S]):
                Any finite iterable. It is consumed exactly once.

        Returns:
            RList[S]:
                The new list. An `RList` argument is returned as is.
        """
        if isinstance(iterable, RList):
            return iterable
        acc: RList[S] = RNil
        for item in iterable:
            acc = Cons(item, acc)
        return acc.reverse()

    @classmethod
    def of(cls, *items: S) -> RList[S]:
        """
        Builds a list from its arguments: `RList.of(1, 2, 3)` is `[1, 2, 3]`.
        """
        return cls.from_sequence(items)

    def prepend(self, elem: S) -> RList[T_co | S]:
        """
        Returns a new list with `elem` in front of this one. O(1).

        Args:
            elem (S):
                The new first element.

        Returns:
            RList[T_co | S]:
                A `Cons` whose tail is this list.
        """
        return Cons(elem, self)

    def length(self) -> int:
        """
        Returns the number of elements. O(N).
        """
        count = 0
        remaining: RList[T_co] = self
        while not remaining.is_empty():
            count += 1
            remaining = remaining.tail
        return count

    def at(self, index: int) -> T_co:
        """
        Returns the element at a 0-based position.

        The walk stops as soon as the element is found, so the cost is O(min(N, index + 1)).

        Args:
            index (int):
                Position of the element. Negative indexes are not supported.

        Returns:
            T_co:
                The element at `index`.

        Raises:
            InvalidIndexError:
                If `index` is negative or not smaller than the length of the list.
            TypeError:
                If `index` is not an integer.
        """
        index = strict_int("index", index)
        if index < 0:
            raise InvalidIndexError(index)

        position = 0
        remaining: RList[T_co] = self
        while not remaining.is_empty():
            if position == index:
                return remaining.head
            remaining = remaining.tail
            position += 1
        raise InvalidIndexError(index)

    def reverse(self) -> RList[T_co]:
        """
        Returns the elements in reverse order. The empty list reverses to itself.
        """
        return _prepend_all(self, RNil)

    def concatenate(self, other: RList[S]) -> RList[T_co | S]:
        """
        Returns the elements of this list followed by the elements of `other`.

        `other` is not copied: it becomes the shared tail of the result. The cost is O(N) where
        N is the length of this list.

        Args:
            other (RList[S]):
                The list to append.

        Returns:
            RList[T_co | S]:
                The concatenated list.

        Raises:
            TypeError:
                If `other` is not an `RList`.
        """
        if not isinstance(other, RList):
            raise TypeError(f"can only concatenate RList (not {type(other).__name__}) to RList")
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        return _prepend_all(self.reverse(), other)

    def remove_at(self, index: int) -> RList[T_co]:
        """
        Returns a new list without the element at `index`.

        Elements after `index` are not copied; the result shares them with this list.

        Args:
            index (int):
                Position of the element to drop.

        Returns:
            RList[T_co]:
                The list without the element. If `index` is not smaller than the length, the
                list is returned unchanged.

        Raises:
            InvalidIndexError:
                If `index` is negative.
            TypeError:
                If `index` is not an integer.
        """
        index = strict_int("index", index)
        if index < 0:
            raise InvalidIndexError(index)

        position = 0
        prefix: RList[T_co] = RNil
        remaining: RList[T_co] = self
        while not remaining.is_empty():
            if position == index:
                return _prepend_all(prefix, remaining.tail)
            prefix = Cons(remaining.head, prefix)
            remaining = remaining.tail
            position += 1
        return self

    def map(self, f: Callable[[T_co], S]) -> RList[S]:
        """
        Returns the list of `f(x)` for every element `x`, in order.
        """
        acc: RList[S] = RNil
        for elem in self:
            acc = Cons(f(elem), acc)
        return acc.reverse()

    def flat_map(self, f: Callable[[T_co], Iterable[S]]) -> RList[S]:
        """
        Applies `f` to every element and concatenates the produced sequences, in order.

        All produced elements go onto a single reversed accumulator which is reversed once at
        the end, so the cost is O(N + Z) where Z is the total number of produced elements.

        Args:
            f (Callable[[T_co], Iterable[S]]):
                Function returning an `RList` (or any finite iterable) for each element.

        Returns:
            RList[S]:
                The concatenation of every `f(x)`.
        """
        acc: RList[S] = RNil
        for elem in self:
            for produced in f(elem):
                acc = Cons(produced, acc)
        return acc.reverse()

    def filter(self, predicate: Callable[[T_co], bool]) -> RList[T_co]:
        """
        Returns the elements for which `predicate` is true, in their original order.
        """
        acc: RList[T_co] = RNil
        for elem in self:
            if predicate(elem):
                acc = Cons(elem, acc)
        return acc.reverse()

    def rle(self) -> RList[tuple[T_co, int]]:
        """
        Run-length encodes the list.

        Consecutive elements that compare equal are collapsed into a single `(element, count)`
        pair. The element kept for a run is the first one of that run.

        Returns:
            RList[tuple[T_co, int]]:
                The runs, in order. The empty list encodes to the empty list.

        Example:
            >>> RList.of(1, 1, 1, 2, 3, 3).rle()
            RList([(1, 3), (2, 1), (3, 2)])
        """
        if self.is_empty():
            return RNil

        acc: RList[tuple[T_co, int]] = RNil
        value = self.head
        count = 1
        for elem in self.tail:
            if elem == value:
                count += 1
            else:
                acc = Cons((value, count), acc)
                value = elem
                count = 1
        return Cons((value, count), acc).reverse()

    def duplicate_each(self, k: int) -> RList[T_co]:
        """
        Returns a list where every element appears `k` consecutive times.

        Args:
            k (int):
                Number of copies of each element. `k <= 0` yields the empty list.

        Returns:
            RList[T_co]:
                The expanded list, of length N * k.

        Raises:
            TypeError:
                If `k` is not an integer.
        """
        k = strict_int("k", k)
        if k <= 0:
            return RNil

        acc: RList[T_co] = RNil
        for elem in self:
            for _ in range(k):
                acc = Cons(elem, acc)
        return acc.reverse()

    def rotate(self, k: int) -> RList[T_co]:
        """
        Rotates the list left by `k` positions: the first `k` elements move to the back.

        `k` is taken modulo the length of the list, so `k` may exceed the length and a negative
        `k` rotates to the right.

        Args:
            k (int):
                Number of positions to rotate by.

        Returns:
            RList[T_co]:
                The rotated list. The empty list rotates to itself.

        Raises:
            TypeError:
                If `k` is not an integer.
        """
        k = strict_int("k", k)
        if self.is_empty():
            return self

        shift = k % self.length()
        if shift == 0:
            return self

        prefix: RList[T_co] = RNil
        remaining: RList[T_co] = self
        for _ in range(shift):
            prefix = Cons(remaining.head, prefix)
            remaining = remaining.tail
        return remaining.concatenate(prefix.reverse())

    def sample(self, k: int, rng: np.random.Generator | None = None) -> RList[T_co]:
        """
        Draws `k` elements uniformly at random, with replacement.

        The list is copied once into an indexable buffer, then all `k` positions are drawn in a
        single call to `rng.integers`. The same element may be drawn several times and `k` may
        exceed the length of the list.

        Args:
            k (int):
                Number of elements to draw. `k <= 0` yields the empty list.
            rng (np.random.Generator | None):
                Source of randomness. Pass a seeded generator for reproducible draws. If None,
                a fresh `np.random.default_rng()` is created for this call.

        Returns:
            RList[T_co]:
                A list of exactly `max(k, 0)` elements, all taken from this list.

        Raises:
            InvalidSampleSizeError:
                If `k > 0` and the list is empty.
            TypeError:
                If `k` is not an integer.
        """
        k = strict_int("k", k)
        if k <= 0:
            return RNil
        if self.is_empty():
            raise InvalidSampleSizeError(k)

        if rng is None:
            rng = np.random.default_rng()

        buffer = list(self)
        positions = rng.integers(0, len(buffer), size=k)
        return RList.from_sequence(buffer[position] for position in positions.tolist())

    # Sequence protocol

    @overload
    def __getitem__(self, index: int) -> T_co: ...

    @overload
    def __getitem__(self, index: slice) -> RList[T_co]: ...

    def __getitem__(self, index: int | slice) -> T_co | RList[T_co]:
        if isinstance(index, slice):
            return RList.from_sequence(tuple(self)[index])
        index = strict_int("index", index)
        if index < 0:
            # counted from the end, unlike `at`
            resolved = index + self.length()
            if resolved < 0:
                raise InvalidIndexError(index)
            return self.at(resolved)
        return self.at(index)

    def __len__(self) -> int:
        return self.length()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __iter__(self) -> Iterator[T_co]:
        remaining: RList[T_co] = self
        while not remaining.is_empty():
            yield remaining.head
            remaining = remaining.tail

    def __reversed__(self) -> Iterator[T_co]:
        return iter(self.reverse())

    def __contains__(self, item: object) -> bool:
        return any(elem is item or elem == item for elem in self)

    def count(self, value: object) -> int:
        """
        Returns the number of elements equal to `value`.
        """
        return sum(1 for elem in self if elem is value or elem == value)

    def index(self, value: object, start: int = 0, stop: int | None = None) -> int:
        """
        Returns the position of the first element equal to `value`.

        Args:
            value (object):
                The value to locate.
            start (int):
                Optional start index. Negative values count from the end.
            stop (int | None):
                Optional stop index. Negative values count from the end.

        Returns:
            int:
                Index of the value.

        Raises:
            ValueError: If the value is not present.
            TypeError: If `start` or `stop` is not an integer.
        """
        start = strict_int("start", start)
        if stop is not None:
            stop = strict_int("stop", stop)

        if start < 0 or (stop is not None and stop < 0):
            size = self.length()
            if start < 0:
                start = max(size + start, 0)
            if stop is not None and stop < 0:
                stop += size

        for position, elem in enumerate(self):
            if stop is not None and position >= stop:
                break
            if position >= start and (elem is value or elem == value):
                return position
        raise ValueError(f"{value!r} is not in RList")

    def __add__(self, other: object) -> RList[Any]:
        if not isinstance(other, RList):
            return NotImplemented
        return self.concatenate(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RList):
            left: RList[Any] = self
            right: RList[Any] = other
            while not left.is_empty() and not right.is_empty():
                # a shared suffix is equal to itself
                if left is right:
                    return True
                if not (left.head is right.head or left.head == right.head):
                    return False
                left = left.tail
                right = right.tail
            return left.is_empty() and right.is_empty()
        # list and tuple only: a str is never equal to a list, and equal tuples hash alike
        if isinstance(other, (list, tuple)):
            return tuple(self) == tuple(other)
        return False

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __str__(self) -> str:
        return "[" + ", ".join(repr(elem) for elem in self) + "]"

    def __repr__(self) -> str:
        return f"RList({self})"

    def __reduce__(self) -> tuple[Any, ...]:
        # flat form; the default reduction would recurse once per node
        return (RList.from_sequence, (tuple(self),))


class Cons(RList[T_co]):
    """
    A non-empty list: one element followed by the rest of the list.

    Attributes:
        _head (T_co):
            The first element.
        _tail (RList[T_co]):
            The remaining elements. May be shared with any number of other lists.
    """

    __slots__ = ("_head", "_tail")

    _head: T_co
    _tail: RList[T_co]

    def __init__(self, head: T_co, tail: RList[T_co]):
        if not isinstance(tail, RList):
            raise TypeError(f"Cons tail must be an RList, got {type(tail).__name__}")
        object.__setattr__(self, "_head", head)
        object.__setattr__(self, "_tail", tail)

    @property
    def head(self) -> T_co:
        return self._head

    @property
    def tail(self) -> RList[T_co]:
        return self._tail

    def is_empty(self) -> bool:
        return False


class _Nil(RList[Never]):
    """
    The empty list. There is exactly one instance, exported as `RNil`.
    """

    __slots__ = ()

    _instance: ClassVar[_Nil | None] = None

    def __new__(cls) -> _Nil:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def head(self) -> Never:
        raise EmptyListAccessError("head")

    @property
    def tail(self) -> RList[Never]:
        raise EmptyListAccessError("tail")

    def is_empty(self) -> bool:
        return True


RNil: Final[_Nil] = _Nil()


def _prepend_all(source: RList[S], target: RList[S]) -> RList[S]:
    """
    Prepends every element of `source`, in iteration order, onto `target`.

    The elements of `source` therefore end up reversed in front of `target`. This is the
    building block of `reverse`, `concatenate` and `remove_at`.
    """
    for elem in source:
        target = Cons(elem, target)
    return target


__all__ = [
    "RList",
    "Cons",
    "RNil",
]
