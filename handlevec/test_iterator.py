# Copyright (c) Meta Platforms, Inc. and affiliates.
import pytest

from handlevec import (
    STOP_INDEX,
    HandleConsumedError,
    HandleIterator,
    HandleIteratorState,
    IterationLimitError,
    MutationArgs,
)
from handlevec.abstract_iterator import IteratorState, StatefulIterator


def test_create_iter_visits_every_element():
    v = [1, 2, 3]
    iterator = HandleIterator(v)
    seen = []
    for handle in iterator.create_iter():
        seen.append(handle.get())
    assert seen == [1, 2, 3]
    assert iterator.steps == 3


def test_handles_are_released_between_steps():
    v = [1, 2, 3]
    handles = []
    for handle in HandleIterator(v).create_iter():
        handles.append(handle)
        assert handle.is_live
    assert not any(h.is_live for h in handles)
    with pytest.raises(HandleConsumedError):
        handles[0].set(10)
    assert v == [1, 2, 3]


def test_state_resume():
    v = [1, 2, 3, 4, 5]
    iterator = HandleIterator(v)
    it = iterator.create_iter()
    for handle in it:
        handle.discard()
        if iterator.steps == 2:
            break
    it.close()
    assert v == [3, 4, 5]

    state = iterator.get_state()
    assert state.next_index == 0
    assert state.steps == 2

    dumped = state.model_dump()
    resumed = HandleIteratorState(**dumped).build(v)
    seen = [handle.get() for handle in resumed.create_iter()]
    assert seen == [3, 4, 5]
    assert resumed.steps == 5


def test_state_after_stop():
    v = [1, 2, 3]
    iterator = HandleIterator(v)
    for handle in iterator.create_iter():
        handle.stop_iteration()
    assert iterator.get_state().next_index == STOP_INDEX
    assert list(iterator.get_state().build(v).create_iter()) == []


def test_start_index():
    v = [1, 2, 3, 4]
    seen = [
        h.get() for h in HandleIterator(v, args=MutationArgs(start_index=2)).create_iter()
    ]
    assert seen == [3, 4]


def test_max_steps_stops_runaway_insertion():
    v = [1]
    iterator = HandleIterator(v, args=MutationArgs(max_steps=10))
    with pytest.raises(IterationLimitError):
        for handle in iterator.create_iter():
            handle.insert_and_process(handle.get() + 1)
    assert iterator.steps == 10
    assert v == list(range(1, 12))


def test_max_steps_reached_exactly_at_end_is_fine():
    v = [1, 2, 3]
    iterator = HandleIterator(v, args=MutationArgs(max_steps=3))
    assert len(list(iterator.create_iter())) == 3


def test_iterator_and_state_share_stateful_interface():
    iterator = HandleIterator([1, 2])
    assert isinstance(iterator, StatefulIterator)
    state = iterator.get_state()
    assert isinstance(state, IteratorState)
    assert isinstance(state.build([1, 2]), StatefulIterator)

    class Incomplete(StatefulIterator):
        def get_state(self):
            return None

    with pytest.raises(TypeError):
        Incomplete()
