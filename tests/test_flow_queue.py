from coach.tour import flow
from coach.tour.flow import EMPTY, FlowState

from tests.factories import make_step

A, B, C = make_step("A"), make_step("B"), make_step("C")
X, Y = make_step("X"), make_step("Y")


def test_seed_loads_head_as_current():
    state = flow.seed([A, B, C])
    assert state.current == A
    assert state.queue == (B, C)
    assert flow.seed([]) == EMPTY


def test_queue_front_keeps_active_step():
    state = FlowState(current=A, queue=(B, C))
    out = flow.queue_front(state, [X, Y])
    assert out.current == A
    assert out.step_ids() == ["A", "X", "Y", "B", "C"]


def test_queue_front_promotes_when_nothing_current():
    state = FlowState(current=None, queue=(B, C))
    out = flow.queue_front(state, [X, Y])
    assert out.current == X
    assert out.queue == (Y, B, C)


def test_queue_front_empty_batch_is_identity():
    state = FlowState(current=A, queue=(B,))
    assert flow.queue_front(state, []) is state


def test_advance_is_fifo_and_total():
    state = flow.seed([A, B, C])
    seen = [state.current.id]
    while True:
        state = flow.advance(state)
        if state.current is None:
            break
        seen.append(state.current.id)
    assert seen == ["A", "B", "C"]
    assert state.is_empty
    # advancing an empty flow stays empty
    assert flow.advance(EMPTY) == EMPTY


def test_replace_current_leaves_queue():
    state = FlowState(current=A, queue=(B, C))
    out = flow.replace_current(state, X)
    assert out.current == X
    assert out.queue == (B, C)
    # input state untouched
    assert state.current == A
