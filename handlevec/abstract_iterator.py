# Copyright (c) Meta Platforms, Inc. and affiliates.
import abc
from typing import Any, Generator, Generic, MutableSequence, TypeVar

T = TypeVar("T")
H = TypeVar("H")
C = TypeVar("C")


class StatefulIterator(Generic[T, H, C], abc.ABC):
    """Hands out H per step over a caller-owned sequence of T, resumable from C."""

    @abc.abstractmethod
    def get_state(self) -> C:
        pass

    @abc.abstractmethod
    def create_iter(self) -> Generator[H, Any, None]:
        pass


class IteratorState(Generic[C]):
    # The sequence is owned by the caller, so it is not part of the state
    @abc.abstractmethod
    def build(self, vec: MutableSequence[Any]) -> StatefulIterator[Any, Any, C]:
        pass
