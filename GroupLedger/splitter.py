"""
Splitter Module

This module folds expense and settlement records into one net balance per
person, and holds the split checks and builders used before records are
handed to the ledger.

Features:
    - Per-person net balance over a group's full history
    - Deterministic ordering (sorted by person_id)
    - Split-sum validation for expenses
    - Equal and custom split builders that always sum to the total

Data Model:
    Input - expenses: list of ExpenseRecord
    Input - settlements: list of SettlementRecord
    Output - balances: list of Balance sorted by person_id
        - amount > 0: person gets money back
        - amount < 0: person owes money

Functions:
    calculate_balances: Net balance per person for one group.
    balance_total: Sum of a list of balances.
    validate_expense: Reject an expense whose splits do not match its total.
    validate_settlement: Reject a settlement that cannot be applied.
    equal_splits: Divide an amount equally, cent-exact.
    custom_splits: Build splits from explicit per-person amounts.
"""

import logging
from decimal import Decimal

from money import CENT, EPSILON, quantize, to_amount, to_decimal
from records import Balance, ExpenseRecord, ExpenseSplit, SettlementRecord
from exceptions import InvalidSettlement, SplitMismatch


logger = logging.getLogger(__name__)


def calculate_balances(
    expenses: list[ExpenseRecord],
    settlements: list[SettlementRecord],
    group_id: str
) -> list[Balance]:
    """
    Calculate each person's net balance within a group.

    For each expense:
        1. The payer is credited the full expense amount
        2. Each split's person is debited their share
    For each settlement (a repayment from debtor to creditor):
        1. from_person_id is credited the amount, reducing what they owe
        2. to_person_id is debited the amount, reducing what they are owed

    Args:
        expenses: Expense records, from any group.
        settlements: Settlement records, from any group.
        group_id: The group to compute balances for.

    Returns:
        list[Balance]: One entry per person seen in the group, sorted by
        person_id. People with no net activity appear with amount 0.0.

    Notes:
        - Records from other groups are ignored, so pre-filtered input works too
        - Split sums are NOT checked here; see validate_expense
        - Does NOT modify the input records
    """
    group_expenses = [e for e in expenses if e.group_id == group_id]
    group_settlements = [s for s in settlements if s.group_id == group_id]

    # Every person involved starts at zero, even if their activity nets out
    totals: dict[str, Decimal] = {}
    for expense in group_expenses:
        totals.setdefault(expense.paid_by, Decimal("0"))
        for split in expense.splits:
            totals.setdefault(split.person_id, Decimal("0"))
    for settlement in group_settlements:
        totals.setdefault(settlement.from_person_id, Decimal("0"))
        totals.setdefault(settlement.to_person_id, Decimal("0"))

    for expense in group_expenses:
        totals[expense.paid_by] += to_decimal(expense.amount)
        for split in expense.splits:
            totals[split.person_id] -= to_decimal(split.amount)

    for settlement in group_settlements:
        amount = to_decimal(settlement.amount)
        totals[settlement.from_person_id] += amount
        totals[settlement.to_person_id] -= amount

    logger.debug(
        "Aggregated %d expenses and %d settlements for group %s into %d balances",
        len(group_expenses), len(group_settlements), group_id, len(totals)
    )

    return [
        Balance(person_id=person_id, amount=to_amount(total))
        for person_id, total in sorted(totals.items())
    ]


def balance_total(balances: list[Balance]) -> Decimal:
    """Sum of all balance amounts, quantized."""
    return quantize(sum((to_decimal(b.amount) for b in balances), Decimal("0")))


def validate_expense(expense: ExpenseRecord) -> None:
    """
    Check that an expense's splits add up to its amount.

    Args:
        expense: The expense to check.

    Raises:
        SplitMismatch: If the quantized split total differs from the
            quantized amount by EPSILON or more. An expense with no splits
            always mismatches.
    """
    expected = quantize(expense.amount)
    actual = quantize(sum((to_decimal(s.amount) for s in expense.splits), Decimal("0")))
    if abs(expected - actual) >= EPSILON:
        raise SplitMismatch(expense.id, expected, actual)


def validate_settlement(settlement: SettlementRecord) -> None:
    """
    Check that a settlement moves a positive amount between two people.

    Raises:
        InvalidSettlement: On a self-transfer or an amount that rounds to zero
            or below.
    """
    if settlement.from_person_id == settlement.to_person_id:
        raise InvalidSettlement(settlement.id, "payer and receiver are the same person")
    if quantize(settlement.amount) <= 0:
        raise InvalidSettlement(settlement.id, f"amount must be positive, got {settlement.amount}")


def equal_splits(amount, person_ids: list[str]) -> list[ExpenseSplit]:
    """
    Divide an amount equally among people, to the cent.

    Leftover cents go one each to the first people in the given order, so
    30.00 / 3 is 10.00 each and 10.00 / 3 is 3.34, 3.33, 3.33.

    Args:
        amount: Total to divide (must be > 0).
        person_ids: People sharing the cost, in display order.

    Returns:
        list[ExpenseSplit]: Splits whose amounts sum exactly to amount.

    Raises:
        ValueError: If person_ids is empty or has duplicates, or amount <= 0.
    """
    if not person_ids:
        raise ValueError("person_ids must be a non-empty list")
    if len(set(person_ids)) != len(person_ids):
        raise ValueError("person_ids must not contain duplicates")

    total = quantize(amount)
    if total <= 0:
        raise ValueError(f"amount must be a positive number, got: {amount}")

    cents = int(total / CENT)
    base, remainder = divmod(cents, len(person_ids))

    splits = []
    for index, person_id in enumerate(person_ids):
        share_cents = base + (1 if index < remainder else 0)
        splits.append(ExpenseSplit(person_id=person_id, amount=to_amount(share_cents * CENT)))
    return splits


def custom_splits(amount, shares: dict) -> list[ExpenseSplit]:
    """
    Build splits from explicit per-person amounts.

    Args:
        amount: The expense total.
        shares: Mapping of person_id to the amount that person owes.

    Returns:
        list[ExpenseSplit]: One split per entry, in mapping order.

    Raises:
        SplitMismatch: If the shares do not add up to amount.
    """
    splits = [
        ExpenseSplit(person_id=person_id, amount=to_amount(share))
        for person_id, share in shares.items()
    ]
    expected = quantize(amount)
    actual = quantize(sum((to_decimal(s.amount) for s in splits), Decimal("0")))
    if abs(expected - actual) >= EPSILON:
        raise SplitMismatch(None, expected, actual)
    return splits
