import logging
from decimal import Decimal

import pytest

from money import EPSILON, to_decimal
from records import Balance, ExpenseRecord, SettlementRecord
from ledger import compute_balances, compute_settlement_plan, summarize_group
from settlement import residual_balances
from splitter import equal_splits
from exceptions import SplitMismatch, UnbalancedLedger


def expense(expense_id, amount, paid_by, splits, group_id="trip", category="food"):
    return ExpenseRecord(
        id=expense_id, group_id=group_id, amount=amount, paid_by=paid_by,
        splits=splits, category=category, date="2025-12-01",
    )


def settlement(settlement_id, from_person_id, to_person_id, amount, group_id="trip"):
    return SettlementRecord(
        id=settlement_id, group_id=group_id, from_person_id=from_person_id,
        to_person_id=to_person_id, amount=amount, date="2025-12-03",
    )


@pytest.fixture
def history():
    expenses = [
        expense("E001", 100, "P1", equal_splits(100, ["P1", "P2", "P3", "P4"]), category="hotel"),
        expense("E002", 45.50, "P2", equal_splits(45.50, ["P2", "P3", "P4"])),
        expense("E003", 10, "P3", equal_splits(10, ["P1", "P3"]), category="transport"),
        expense("E004", 500, "P9", equal_splits(500, ["P8", "P9"]), group_id="other"),
    ]
    settlements = [settlement("S001", "P4", "P1", 20)]
    return expenses, settlements


def test_balances_for_mixed_history(history):
    expenses, settlements = history

    balances = compute_balances(expenses, settlements, "trip")

    assert [(b.person_id, b.amount) for b in balances] == [
        ("P1", 50.0),
        ("P2", 5.33),
        ("P3", -35.17),
        ("P4", -20.16),
    ]


def test_balances_sum_to_zero(history):
    expenses, settlements = history

    balances = compute_balances(expenses, settlements, "trip", strict=True)

    assert abs(sum(to_decimal(b.amount) for b in balances)) < EPSILON


def test_balances_are_idempotent(history):
    expenses, settlements = history

    assert compute_balances(expenses, settlements, "trip") == compute_balances(expenses, settlements, "trip")


def test_plan_settles_group(history):
    expenses, settlements = history
    balances = compute_balances(expenses, settlements, "trip")

    transfers = compute_settlement_plan(balances)
    remaining = residual_balances(balances, transfers)

    assert [(t.from_person_id, t.to_person_id, t.amount) for t in transfers] == [
        ("P3", "P1", 35.17),
        ("P4", "P1", 14.83),
        ("P4", "P2", 5.33),
    ]
    assert all(abs(to_decimal(b.amount)) < EPSILON for b in remaining)


def test_worked_example_with_settlement():
    splits = equal_splits(30, ["A", "B", "C"])
    expenses = [expense("E001", 30, "A", splits)]

    balances = compute_balances(expenses, [], "trip")
    transfers = compute_settlement_plan(balances)
    assert sum(t.amount for t in transfers if t.to_person_id == "A") == 20.0

    balances = compute_balances(expenses, [settlement("S001", "B", "A", 10)], "trip")
    transfers = compute_settlement_plan(balances)

    assert {b.person_id: b.amount for b in balances} == {"A": 10.0, "B": 0.0, "C": -10.0}
    assert [(t.from_person_id, t.to_person_id, t.amount) for t in transfers] == [("C", "A", 10.0)]


def test_settled_group_has_empty_plan():
    expenses = [expense("E001", 20, "A", equal_splits(20, ["A", "B"]))]
    balances = compute_balances(expenses, [settlement("S001", "B", "A", 10)], "trip")

    assert compute_settlement_plan(balances) == []
    assert compute_settlement_plan([]) == []


def test_strict_mode_rejects_split_mismatch():
    bad = expense("E001", 10, "A", [{"person_id": "A", "amount": 3.33}, {"person_id": "B", "amount": 3.33}])

    with pytest.raises(SplitMismatch):
        compute_balances([bad], [], "trip", strict=True)


def test_strict_mode_ignores_other_groups():
    bad = expense("E001", 10, "A", [{"person_id": "B", "amount": 1}], group_id="other")

    assert compute_balances([bad], [], "trip", strict=True) == []


def test_lenient_mode_folds_mismatch_and_warns(caplog):
    bad = expense("E001", 10, "A", [{"person_id": "A", "amount": 3}, {"person_id": "B", "amount": 3}])

    with caplog.at_level(logging.WARNING):
        balances = compute_balances([bad], [], "trip", strict=False)

    assert {b.person_id: b.amount for b in balances} == {"A": 7.0, "B": -3.0}
    assert "sum to 4.00" in caplog.text


def test_plan_for_unbalanced_ledger_raises():
    balances = [Balance(person_id="A", amount=10), Balance(person_id="B", amount=-4)]

    with pytest.raises(UnbalancedLedger) as excinfo:
        compute_settlement_plan(balances)

    assert excinfo.value.residual == Decimal("6.00")
    assert [(b.person_id, b.amount) for b in excinfo.value.balances] == [("A", 6.0)]


def test_summarize_group(history):
    expenses, settlements = history

    result = summarize_group(expenses, settlements, "trip")

    assert result["group_id"] == "trip"
    assert len(result["transfers"]) == 3
    analytics = result["analytics"]
    assert analytics["total_spent"] == 155.5
    assert analytics["category_breakdown"] == {"food": 45.5, "hotel": 100.0, "transport": 10.0}
    assert analytics["outstanding_total"] == 55.33
    assert analytics["statuses"] == {
        "P1": "gets_back", "P2": "gets_back", "P3": "owes", "P4": "owes"
    }


def test_plan_reports_credit_left_by_sub_cent_debts():
    balances = [
        Balance(person_id="A", amount=0.02),
        Balance(person_id="B", amount=-0.01),
        Balance(person_id="C", amount=-0.01),
    ]

    with pytest.raises(UnbalancedLedger) as excinfo:
        compute_settlement_plan(balances, "trip")

    assert excinfo.value.group_id == "trip"
    assert excinfo.value.residual == Decimal("0.02")
    assert [(b.person_id, b.amount) for b in excinfo.value.balances] == [("A", 0.02)]


def test_plan_tolerates_single_cent_leftover():
    balances = [
        Balance(person_id="A", amount=10.01),
        Balance(person_id="B", amount=-10),
        Balance(person_id="C", amount=-0.01),
    ]

    transfers = compute_settlement_plan(balances)

    assert [(t.from_person_id, t.to_person_id, t.amount) for t in transfers] == [("B", "A", 10.0)]
