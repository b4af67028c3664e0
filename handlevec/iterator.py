# Copyright (c) Meta Platforms, Inc. and affiliates.
from logging import getLogger
from typing import Any, Generator, MutableSequence, TypeVar

from pydantic import BaseModel, ConfigDict

from handlevec import IterationLimitError
from handlevec.abstract_iterator import IteratorState, StatefulIterator
from handlevec.args import MutationArgs
from handlevec.cursor import Cursor
from handlevec.handle import VecMutationHandle

logger = getLogger(__name__)

T = TypeVar("T")


class HandleIteratorState(BaseModel, IteratorState):
    model_config = ConfigDict(extra="forbid")
    next_index: int
    steps: int
    args: MutationArgs

    def build(self, vec: MutableSequence[T]) -> "HandleIterator[T]":
        return HandleIterator(
            vec,
            cursor=Cursor(next_index=self.next_index),
            args=self.args,
            steps=self.steps,
        )


class HandleIterator(
    StatefulIterator[T, VecMutationHandle[T], HandleIteratorState]
):
    """
    Hands out one VecMutationHandle per step. Each handle is released when
    the generator is resumed or closed, so keeping one past its step is
    harmless: it refuses every operation.
    """

    def __init__(
        self,
        vec: MutableSequence[T],
        *,
        cursor: Cursor | None = None,
        args: MutationArgs | None = None,
        steps: int = 0,
    ):
        self.vec = vec
        self.args = MutationArgs() if args is None else args
        if cursor is None:
            cursor = Cursor(next_index=self.args.start_index)
        self.cursor = cursor
        self.steps = steps

    def get_state(self) -> HandleIteratorState:
        return HandleIteratorState(
            next_index=self.cursor.next_index,
            steps=self.steps,
            args=self.args,
        )

    def create_iter(self) -> Generator[VecMutationHandle[T], Any, None]:
        max_steps = self.args.max_steps
        while True:
            if (
                max_steps is not None
                and self.steps >= max_steps
                and self.cursor.next_index < len(self.vec)
            ):
                raise IterationLimitError(
                    f"Handed out {self.steps} handles without reaching the end of the sequence "
                    f"(max_steps={max_steps}, next index {self.cursor.next_index}, length {len(self.vec)})"
                )
            handle = VecMutationHandle.new(self.vec, self.cursor)
            if handle is None:
                logger.debug(
                    "Handle pass finished after %d steps, sequence length %d",
                    self.steps,
                    len(self.vec),
                )
                return
            self.steps += 1
            try:
                yield handle
            finally:
                handle.release()
