import pytest

from lis_core.common.errors import IllegalTransition
from lis_core.orders.lifecycle import allowed_targets, can_transition, ensure_transition, is_terminal
from lis_core.orders.models import OrderStatus

S = OrderStatus
CHAIN = [S.PENDING, S.IN_PROGRESS, S.COMPLETE, S.DELIVERED]


@pytest.mark.parametrize("current,target", list(zip(CHAIN, CHAIN[1:])))
def test_forward_chain_is_allowed(current, target):
    assert can_transition(current, target)


@pytest.mark.parametrize("current", [S.PENDING, S.IN_PROGRESS, S.COMPLETE])
def test_void_from_any_open_state(current):
    assert can_transition(current, S.VOIDED)


@pytest.mark.parametrize(
    "current,target",
    [
        (S.PENDING, S.COMPLETE),
        (S.PENDING, S.DELIVERED),
        (S.IN_PROGRESS, S.PENDING),
        (S.COMPLETE, S.IN_PROGRESS),
        (S.DELIVERED, S.PENDING),
        (S.DELIVERED, S.VOIDED),
        (S.VOIDED, S.PENDING),
        (S.PENDING, S.PENDING),
        (S.COMPLETE, S.COMPLETE),
    ],
)
def test_everything_else_is_illegal(current, target):
    with pytest.raises(IllegalTransition) as exc:
        ensure_transition(current, target)
    assert exc.value.current == current
    assert exc.value.requested == target


def test_terminal_states_have_no_targets():
    assert allowed_targets(S.DELIVERED) == frozenset()
    assert allowed_targets(S.VOIDED) == frozenset()
    assert is_terminal(S.DELIVERED) and is_terminal(S.VOIDED)
    assert not is_terminal(S.COMPLETE)


def test_unknown_status_has_no_targets():
    assert allowed_targets("archived") == frozenset()
    assert not can_transition(S.PENDING, "archived")
