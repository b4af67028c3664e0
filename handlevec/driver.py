# Copyright (c) Meta Platforms, Inc. and affiliates.
from contextlib import closing
from typing import Any, Callable, Generator, Generic, Iterable, MutableSequence, TypeVar

from handlevec.args import MutationArgs
from handlevec.handle import VecMutationHandle
from handlevec.iterator import HandleIterator

T = TypeVar("T")

HandleOp = Callable[[VecMutationHandle[T]], Any]


def mutate_vec_by_handles(
    vec: MutableSequence[T], op: HandleOp, *, args: MutationArgs | None = None
) -> None:
    """
    Call op once per visited element of vec with a handle for that element.
    op may keep state of its own, but the handle stops working once op
    returns.
    """
    iterator = HandleIterator(vec, args=args)
    with closing(iterator.create_iter()) as handles:
        for handle in handles:
            op(handle)


def mutated_by_handles(
    values: Iterable[T], op: HandleOp, *, args: MutationArgs | None = None
) -> list[T]:
    vec = list(values)
    mutate_vec_by_handles(vec, op, args=args)
    return vec


class HandleVec(list, Generic[T]):
    def mutate_vec_by_handles(
        self, op: HandleOp, *, args: MutationArgs | None = None
    ) -> None:
        mutate_vec_by_handles(self, op, args=args)

    def handles(
        self, args: MutationArgs | None = None
    ) -> Generator[VecMutationHandle[T], Any, None]:
        return HandleIterator(self, args=args).create_iter()
