# Copyright (c) Meta Platforms, Inc. and affiliates.
from typing import Callable, Iterable, TypeVar

from handlevec.core import HandleCore

T = TypeVar("T")


class VecMutationHandle(HandleCore[T]):
    """
    Authority over one element of a list for one iteration step. Everything
    here is built from the core operations and never touches indices itself.
    """

    def insert_and_skip(self, value: T) -> None:
        """Insert value right after the current element, without visiting it this pass."""
        self.insert_and_process(value)
        self.skip_forward(1)

    def replace(self, value: T) -> T:
        previous = self.get()
        self.set(value)
        return previous

    def update(self, func: Callable[[T], T]) -> T:
        value = func(self.get())
        self.set(value)
        return value

    def insert_and_process_vec(self, values: Iterable[T]) -> None:
        """Insert values after the current element, in their given order, and visit them next."""
        # Each insert lands in front of the previous one
        for value in reversed(list(values)):
            self.insert_and_process(value)

    def insert_and_skip_vec(self, values: Iterable[T]) -> None:
        values = list(values)
        self.insert_and_process_vec(values)
        self.skip_forward(len(values))
