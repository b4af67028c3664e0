# Copyright (c) Meta Platforms, Inc. and affiliates.
import operator
import weakref
from enum import Enum
from logging import getLogger
from typing import Generic, MutableSequence, TypeVar

from handlevec import (
    HandleConsumedError,
    HandleInUseError,
    InvariantViolation,
    StaleViewError,
)
from handlevec.cursor import STOP_INDEX, Cursor
from handlevec.views import ForwardSlice, ForwardSliceMut

logger = getLogger(__name__)

T = TypeVar("T")
H = TypeVar("H", bound="HandleCore")

# id(sequence) -> its live handle. A live handle keeps its sequence alive,
# so the id cannot be reused while the entry exists.
_live_handles: "weakref.WeakValueDictionary[int, HandleCore]" = (
    weakref.WeakValueDictionary()
)


class HandleState(str, Enum):
    live = "live"
    consumed = "consumed"
    released = "released"


class HandleCore(Generic[T]):
    """
    All index arithmetic lives here. Everything else goes through these
    methods.

    Contract, checked on entry of every operation while live:
      position < len(vec)
      cursor.next_index >= position
      nothing below position is read or written
    """

    def __init__(self, vec: MutableSequence[T], position: int, cursor: Cursor):
        self._vec = vec
        self._position = position
        self._cursor = cursor
        self._state = HandleState.live
        # Bumped on every change of the sequence length, invalidates views
        self._generation = 0

    @classmethod
    def new(cls: type[H], vec: MutableSequence[T], cursor: Cursor) -> H | None:
        """
        Bind a handle to the element at cursor.next_index, or return None if
        the cursor is at or past the end of vec (iteration is over).

        On success the cursor is immediately moved to the following element,
        so a handle on which nothing is called means "go to the next one".
        A live handle on vec from the same cursor is released first; one
        from any other cursor raises HandleInUseError.
        """
        if len(vec) >= STOP_INDEX:
            raise InvariantViolation(
                f"Sequence length {len(vec)} collides with the stop sentinel"
            )
        previous = _live_handles.get(id(vec))
        if previous is not None:
            if previous._cursor is not cursor:
                raise HandleInUseError(
                    f"Sequence already has a live handle at position {previous._position} "
                    "driven by another cursor"
                )
            previous.release()

        position = cursor.next_index
        if position >= len(vec):
            return None
        cursor.next_index = position + 1
        handle = cls(vec, position, cursor)
        _live_handles[id(vec)] = handle
        return handle

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_live(self) -> bool:
        return self._state is HandleState.live

    def _ensure_live(self) -> None:
        if self._state is not HandleState.live:
            raise HandleConsumedError(
                f"Handle at position {self._position} is {self._state.value}, "
                "no further operations are allowed on it"
            )
        if self._position >= len(self._vec):
            raise InvariantViolation(
                f"Handle position {self._position} is out of bounds for length {len(self._vec)}"
            )
        if self._cursor.next_index < self._position:
            raise InvariantViolation(
                f"Cursor {self._cursor.next_index} moved behind handle position {self._position}"
            )

    def _end(self, state: HandleState) -> None:
        self._state = state
        if _live_handles.get(id(self._vec)) is self:
            del _live_handles[id(self._vec)]

    def _view_target(self, generation: int) -> MutableSequence[T]:
        if self._state is not HandleState.live or generation != self._generation:
            raise StaleViewError(
                f"Forward slice of the handle at position {self._position} is no longer valid"
            )
        self._ensure_live()
        return self._vec

    def release(self) -> None:
        """End this step without a terminal operation. Safe to call repeatedly."""
        if self._state is HandleState.live:
            self._end(HandleState.released)

    def get(self) -> T:
        self._ensure_live()
        return self._vec[self._position]

    def get_mut(self) -> T:
        """
        The current element itself, for in-place mutation when it is a
        mutable object. Use set/update/replace to rebind it.
        """
        self._ensure_live()
        return self._vec[self._position]

    def set(self, value: T) -> None:
        self._ensure_live()
        self._vec[self._position] = value

    def discard(self) -> T:
        """
        Remove the current element and return it. Consumes the handle. The
        element that followed it is visited next.
        """
        self._ensure_live()
        if not self._cursor.stopped:
            self._cursor.next_index -= 1
        value = self._vec[self._position]
        del self._vec[self._position]
        self._generation += 1
        self._end(HandleState.consumed)
        return value

    def insert_and_process(self, value: T) -> None:
        """Insert value right after the current element; it is visited next."""
        self._ensure_live()
        # position + 1 may equal len(vec), insert then appends
        self._vec.insert(self._position + 1, value)
        self._generation += 1

    def skip_forward(self, steps: int) -> None:
        self._ensure_live()
        if steps < 0:
            raise ValueError(f"Can only skip forward, got steps={steps}")
        self._cursor.advance(steps)

    def stop_iteration(self) -> None:
        """
        Visit no further elements. Consumes the handle, but unlike `break` the
        calling code carries on normally after this returns.
        """
        self._ensure_live()
        self._cursor.stop()
        logger.debug("Iteration stopped at position %d", self._position)
        self._end(HandleState.consumed)

    def discard_and_stop_iteration(self) -> T:
        self._ensure_live()
        value = self._vec[self._position]
        del self._vec[self._position]
        self._cursor.stop()
        self._generation += 1
        logger.debug("Iteration stopped at position %d after discard", self._position)
        self._end(HandleState.consumed)
        return value

    def _forward_bounds(self, key: int | slice | range) -> tuple[int, int] | None:
        remaining = len(self._vec) - self._position
        if isinstance(key, (slice, range)):
            if key.step not in (None, 1):
                raise ValueError(f"Forward slices need a step of 1, got {key.step}")
            start = 0 if key.start is None else operator.index(key.start)
            stop = remaining if key.stop is None else operator.index(key.stop)
        else:
            start = operator.index(key)
            stop = start + 1
        if start < 0 or stop < start or stop > remaining:
            return None
        return self._position + start, self._position + stop

    def peek_forward_slice(self, key: int | slice | range) -> T | ForwardSlice[T] | None:
        """
        Look at the sequence from the current element on; offset 0 is the
        current element. An int gives that element, a slice or range gives a
        read-only ForwardSlice. None if the key reaches outside the elements
        from here to the end.
        """
        self._ensure_live()
        bounds = self._forward_bounds(key)
        if bounds is None:
            return None
        if not isinstance(key, (slice, range)):
            return self._vec[bounds[0]]
        return ForwardSlice(self, *bounds)

    def peek_forward_slice_mut(self, key: int | slice | range) -> ForwardSliceMut[T] | None:
        """As peek_forward_slice, but always a writable view (one element long for an int)."""
        self._ensure_live()
        bounds = self._forward_bounds(key)
        if bounds is None:
            return None
        return ForwardSliceMut(self, *bounds)

    def __enter__(self: H) -> H:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self._position}, state={self._state.value})"
