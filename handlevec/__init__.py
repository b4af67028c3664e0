# Copyright (c) Meta Platforms, Inc. and affiliates.
"""
Index-style iteration over a list, with deletion, insertion and other
operations on the list while iterating, without doing the index
bookkeeping by hand.

    from handlevec import mutate_vec_by_handles

    my_vec = [1, 4, 9, 16, 25, 36, 49, 64, 81, 100]

    def multiply_by_next(elem):
        n = elem.peek_forward_slice(1)
        if n is not None:
            elem.update(lambda v: v * n)
        else:
            elem.discard()

    mutate_vec_by_handles(my_vec, multiply_by_next)
    assert my_vec == [4, 36, 144, 400, 900, 1764, 3136, 5184, 8100]

Or, with a manual loop:

    from handlevec import Cursor, VecMutationHandle

    cursor = Cursor()
    while (elem := VecMutationHandle.new(my_vec, cursor)) is not None:
        if elem.get() > 10:
            elem.discard_and_stop_iteration()
        else:
            elem.set(20)

Changes are applied immediately, nothing is buffered. Elements before the
current one can never be read or mutated through a handle.
"""


class HandleVecError(Exception):
    pass


class HandleConsumedError(HandleVecError):
    pass


class HandleInUseError(HandleVecError):
    pass


class StaleViewError(HandleVecError):
    pass


class IterationLimitError(HandleVecError):
    pass


class InvariantViolation(AssertionError):
    """
    Raised when the handle's own index bookkeeping is inconsistent, or the
    sequence was resized behind its back. Never a recoverable condition.
    """


from handlevec.args import MutationArgs  # noqa: E402
from handlevec.cursor import STOP_INDEX, Cursor  # noqa: E402
from handlevec.driver import (  # noqa: E402
    HandleVec,
    mutate_vec_by_handles,
    mutated_by_handles,
)
from handlevec.handle import VecMutationHandle  # noqa: E402
from handlevec.iterator import HandleIterator, HandleIteratorState  # noqa: E402
from handlevec.views import ForwardSlice, ForwardSliceMut  # noqa: E402

__all__ = [
    "STOP_INDEX",
    "Cursor",
    "ForwardSlice",
    "ForwardSliceMut",
    "HandleConsumedError",
    "HandleInUseError",
    "HandleIterator",
    "HandleIteratorState",
    "HandleVec",
    "HandleVecError",
    "InvariantViolation",
    "IterationLimitError",
    "MutationArgs",
    "StaleViewError",
    "VecMutationHandle",
    "mutate_vec_by_handles",
    "mutated_by_handles",
]
