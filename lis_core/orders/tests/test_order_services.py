from decimal import Decimal

import pytest
from django.db import DatabaseError
from django.db.models import Sum
from rest_framework.exceptions import ValidationError

from lis_core.catalog.models import LabTest
from lis_core.common.errors import Forbidden, IllegalTransition, NotFound, OrderLocked, StorageError
from lis_core.lab.models import LabResult, LabResultValue
from lis_core.lab.services import ResultService
from lis_core.orders.models import Order, OrderItem, OrderStatus
from lis_core.orders.services import OrderService, next_order_code

pytestmark = pytest.mark.django_db


def _advance(order, *statuses):
    for s in statuses:
        OrderService.advance_status(order_id=order.id, target_status=s)
    order.refresh_from_db()
    return order


def _capture(order, test, value="13.2"):
    item = order.items.get(test=test)
    return ResultService.save_draft(
        order_id=order.id,
        item_id=item.id,
        values=[{"param_name": "value", "value": value, "unit": "g/dL"}],
    )


# ----------------------------
# create / add
# ----------------------------
def test_create_order_snapshots_prices_and_total(order, cbc, glucose):
    assert order.status == OrderStatus.PENDING
    assert order.total_price == Decimal("80.00")
    snaps = dict(order.items.values_list("test__code", "price_snapshot"))
    assert snaps == {"cbc": Decimal("50.00"), "glucose": Decimal("30.00")}


def test_create_order_code_is_daily_sequence(patient, cbc):
    o1 = OrderService.create_order(patient_id=patient.id, test_ids=[cbc.id])
    o2 = OrderService.create_order(patient_id=patient.id, test_ids=[cbc.id])

    prefix = o1.code.rsplit("-", 1)[0]
    assert o1.code.startswith("ORD-") and o1.code.endswith("-0001")
    assert o2.code == f"{prefix}-0002"


def test_next_order_code_for_given_day():
    from datetime import date

    assert next_order_code(day=date(2026, 3, 9)) == "ORD-20260309-0001"


def test_create_order_ignores_duplicates_and_inactive(patient, cbc, glucose):
    glucose.is_active = False
    glucose.save()

    o = OrderService.create_order(patient_id=patient.id, test_ids=[cbc.id, cbc.id, glucose.id])
    assert o.items.count() == 1
    assert o.total_price == Decimal("50.00")


def test_create_order_requires_an_active_test(patient, glucose):
    glucose.is_active = False
    glucose.save()

    with pytest.raises(ValidationError):
        OrderService.create_order(patient_id=patient.id, test_ids=[glucose.id])
    assert Order.objects.count() == 0


def test_create_order_unknown_patient(cbc):
    import uuid

    with pytest.raises(NotFound):
        OrderService.create_order(patient_id=uuid.uuid4(), test_ids=[cbc.id])


def test_add_items_skips_tests_already_present(order, cbc):
    tsh = LabTest.objects.create(code="tsh", name="TSH", price=Decimal("45.00"))

    created = OrderService.add_items(order_id=order.id, test_ids=[cbc.id, tsh.id])
    assert [i.test_id for i in created] == [tsh.id]

    order.refresh_from_db()
    assert order.total_price == Decimal("125.00")


def test_add_items_uses_current_price(order):
    tsh = LabTest.objects.create(code="tsh", name="TSH", price=Decimal("45.00"))
    tsh.price = Decimal("47.50")
    tsh.save()

    OrderService.add_items(order_id=order.id, test_ids=[tsh.id])
    assert OrderItem.objects.get(order=order, test=tsh).price_snapshot == Decimal("47.50")


@pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.VOIDED])
def test_add_items_rejected_on_terminal_orders(order, terminal):
    tsh = LabTest.objects.create(code="tsh", name="TSH", price=Decimal("45.00"))
    Order.objects.filter(id=order.id).update(status=terminal)

    with pytest.raises(OrderLocked):
        OrderService.add_items(order_id=order.id, test_ids=[tsh.id])


# ----------------------------
# remove
# ----------------------------
def test_remove_item_deletes_result_and_lowers_total(order, cbc):
    _capture(order, cbc)
    item = order.items.get(test=cbc)

    updated = OrderService.remove_item(order_id=order.id, item_id=item.id)

    assert updated.total_price == Decimal("30.00")
    assert not OrderItem.objects.filter(id=item.id).exists()
    assert not LabResult.objects.filter(order_item_id=item.id).exists()
    assert LabResultValue.objects.count() == 0


def test_remove_item_total_never_negative(order, cbc):
    Order.objects.filter(id=order.id).update(total_price=Decimal("10.00"))
    item = order.items.get(test=cbc)

    updated = OrderService.remove_item(order_id=order.id, item_id=item.id)
    assert updated.total_price == Decimal("0.00")


def test_remove_all_items_leaves_zero_total(order):
    for item in list(order.items.all()):
        OrderService.remove_item(order_id=order.id, item_id=item.id)

    order.refresh_from_db()
    assert order.total_price == Decimal("0.00")


def test_remove_unknown_item(order):
    import uuid

    with pytest.raises(NotFound):
        OrderService.remove_item(order_id=order.id, item_id=uuid.uuid4())


def test_remove_item_from_another_order(order, admission_order):
    foreign_item = admission_order.items.first()
    with pytest.raises(NotFound):
        OrderService.remove_item(order_id=order.id, item_id=foreign_item.id)

    assert admission_order.items.filter(id=foreign_item.id).exists()


@pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.VOIDED])
def test_remove_item_rejected_on_terminal_orders(order, cbc, terminal):
    item = order.items.get(test=cbc)
    Order.objects.filter(id=order.id).update(status=terminal)

    with pytest.raises(OrderLocked):
        OrderService.remove_item(order_id=order.id, item_id=item.id)
    assert OrderItem.objects.filter(id=item.id).exists()


def test_remove_item_failure_rolls_back_everything(order, cbc, monkeypatch):
    _capture(order, cbc)
    item = order.items.get(test=cbc)

    def boom(self, *args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(OrderItem, "delete", boom)

    with pytest.raises(StorageError):
        OrderService.remove_item(order_id=order.id, item_id=item.id)

    order.refresh_from_db()
    assert order.total_price == Decimal("80.00")
    assert LabResult.objects.filter(order_item_id=item.id).exists()
    assert LabResultValue.objects.filter(result__order_item_id=item.id).count() == 1


# ----------------------------
# advance
# ----------------------------
def test_complete_validates_all_drafts(order, cbc, glucose):
    _capture(order, cbc)
    _capture(order, glucose)
    assert LabResult.objects.filter(is_draft=True).count() == 2

    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE)

    assert order.status == OrderStatus.COMPLETE
    assert LabResult.objects.filter(order_item__order=order, is_draft=True).count() == 0


def test_results_stay_draft_before_complete(order, cbc):
    _capture(order, cbc)
    _advance(order, OrderStatus.IN_PROGRESS)
    assert LabResult.objects.get(order_item__test=cbc).is_draft is True


def test_complete_allows_items_without_results(order, cbc):
    _capture(order, cbc)
    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE)
    assert order.status == OrderStatus.COMPLETE


def test_complete_does_not_touch_other_orders(order, cbc, patient):
    other = OrderService.create_order(patient_id=patient.id, test_ids=[cbc.id])
    _capture(other, cbc)
    _capture(order, cbc)

    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE)
    assert LabResult.objects.get(order_item__order=other).is_draft is True


def test_delivered_stamps_delivered_at(order):
    assert order.delivered_at is None
    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE, OrderStatus.DELIVERED)
    assert order.delivered_at is not None


def test_void_leaves_results_alone(order, cbc):
    _capture(order, cbc)
    _advance(order, OrderStatus.VOIDED)
    assert order.status == OrderStatus.VOIDED
    assert LabResult.objects.get(order_item__test=cbc).is_draft is True


def test_illegal_transition_leaves_order_unchanged(order):
    with pytest.raises(IllegalTransition):
        OrderService.advance_status(order_id=order.id, target_status=OrderStatus.DELIVERED)

    order.refresh_from_db()
    assert order.status == OrderStatus.PENDING
    assert order.delivered_at is None


def test_nothing_leaves_delivered(order):
    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE, OrderStatus.DELIVERED)
    for target in OrderStatus.values:
        with pytest.raises(IllegalTransition):
            OrderService.advance_status(order_id=order.id, target_status=target)


def test_advance_unknown_order():
    import uuid

    with pytest.raises(NotFound):
        OrderService.advance_status(order_id=uuid.uuid4(), target_status=OrderStatus.IN_PROGRESS)


def test_advance_checks_actor_capability(order, readonly_user, lab_user):
    with pytest.raises(Forbidden):
        OrderService.advance_status(order_id=order.id, target_status=OrderStatus.IN_PROGRESS, actor=readonly_user)

    OrderService.advance_status(order_id=order.id, target_status=OrderStatus.IN_PROGRESS, actor=lab_user)
    order.refresh_from_db()
    assert order.status == OrderStatus.IN_PROGRESS


# ----------------------------
# totals across the whole lifecycle
# ----------------------------
def _assert_total_matches_items(order):
    order.refresh_from_db()
    agg = order.items.aggregate(s=Sum("price_snapshot"))["s"] or Decimal("0.00")
    assert order.total_price == agg
    return order


def test_remove_then_complete_keeps_total_and_blocks_reopen(order, glucose):
    assert order.total_price == Decimal("80.00")

    item = order.items.get(test=glucose)
    OrderService.remove_item(order_id=order.id, item_id=item.id)
    assert _assert_total_matches_items(order).total_price == Decimal("50.00")

    _advance(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETE)

    with pytest.raises(IllegalTransition):
        OrderService.advance_status(order_id=order.id, target_status=OrderStatus.PENDING)

    order.refresh_from_db()
    assert order.status == OrderStatus.COMPLETE
    assert order.total_price == Decimal("50.00")


def test_total_tracks_items_through_add_and_remove(order, cbc, glucose):
    tsh = LabTest.objects.create(code="tsh", name="TSH", section="Hormones", price=Decimal("45.50"))
    _assert_total_matches_items(order)

    OrderService.add_items(order_id=order.id, test_ids=[tsh.id])
    assert _assert_total_matches_items(order).total_price == Decimal("125.50")

    OrderService.remove_item(order_id=order.id, item_id=order.items.get(test=glucose).id)
    assert _assert_total_matches_items(order).total_price == Decimal("95.50")

    OrderService.add_items(order_id=order.id, test_ids=[glucose.id, tsh.id])
    assert _assert_total_matches_items(order).total_price == Decimal("125.50")

    OrderService.remove_item(order_id=order.id, item_id=order.items.get(test=cbc).id)
    assert _assert_total_matches_items(order).total_price == Decimal("75.50")
    assert order.items.count() == 2
