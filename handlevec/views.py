# Copyright (c) Meta Platforms, Inc. and affiliates.
from typing import TYPE_CHECKING, Any, MutableSequence, Sequence, TypeVar, overload

if TYPE_CHECKING:
    from handlevec.core import HandleCore

T = TypeVar("T")


class ForwardSlice(Sequence[T]):
    """
    Read-only window onto the backing sequence, starting at or after the
    position of the handle that produced it. Index 0 is the first element
    of the window, negative indices count from its end and never reach
    before it.

    The window is only valid while its handle is live and has not changed
    the sequence's length; afterwards every access raises StaleViewError.
    """

    def __init__(self, handle: "HandleCore[T]", start: int, stop: int):
        self._handle = handle
        self._start = start
        self._stop = stop
        self._generation = handle._generation

    def _target(self) -> MutableSequence[T]:
        return self._handle._view_target(self._generation)

    def _absolute(self, index: int) -> int:
        length = self._stop - self._start
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("forward slice index out of range")
        return self._start + index

    def __len__(self) -> int:
        self._target()
        return self._stop - self._start

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        vec = self._target()
        if isinstance(index, slice):
            return [
                vec[self._start + i]
                for i in range(*index.indices(self._stop - self._start))
            ]
        return vec[self._absolute(index)]

    def __iter__(self):
        vec = self._target()
        for i in range(self._start, self._stop):
            yield vec[i]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (ForwardSlice, list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ForwardSliceMut(ForwardSlice[T]):
    """Same window as ForwardSlice, but element writes go to the backing sequence."""

    def __setitem__(self, index: int | slice, value: Any) -> None:
        vec = self._target()
        if isinstance(index, slice):
            indices = range(*index.indices(self._stop - self._start))
            values: list[T] = list(value)
            if len(values) != len(indices):
                raise ValueError(
                    f"Cannot assign {len(values)} values to a forward slice of {len(indices)}, "
                    "forward slices cannot change the sequence length"
                )
            for i, v in zip(indices, values):
                vec[self._start + i] = v
        else:
            vec[self._absolute(index)] = value
