"""
Analytics Module

This module provides group-level totals for the ledger.

Features:
    - Total spent and category-wise breakdown
    - Per-person payer totals
    - Total already repaid through settlements
    - Balance status labels (gets back / owes / settled)

Data Model:
    Input - expenses: list of ExpenseRecord
    Input - settlements: list of SettlementRecord

    Output - dict containing:
        - total_spent: float
        - expense_count: int
        - settlement_count: int
        - category_breakdown: dict (category -> amount)
        - payer_totals: dict (person_id -> amount paid)
        - settled_total: float (sum of settlement amounts)

Functions:
    generate_group_summary: Totals for one group.
    balance_status: Label a balance for display.
"""

from collections import defaultdict
from decimal import Decimal

from money import is_negligible, to_amount, to_decimal
from records import Balance, ExpenseRecord, SettlementRecord


GETS_BACK = "gets_back"
OWES = "owes"
SETTLED = "settled"


def generate_group_summary(
    expenses: list[ExpenseRecord],
    settlements: list[SettlementRecord],
    group_id: str
) -> dict:
    """
    Compute spending totals for one group.

    Args:
        expenses: Expense records (filtered by group_id).
        settlements: Settlement records (filtered by group_id).
        group_id: The group to summarize.

    Returns:
        dict: See module docstring. Dict keys are sorted so the result is
        stable across calls.
    """
    category_totals = defaultdict(Decimal)  # category -> total amount
    payer_totals = defaultdict(Decimal)     # person_id -> total amount
    total_spent = Decimal("0")
    expense_count = 0

    for expense in expenses:
        if expense.group_id != group_id:
            continue
        amount = to_decimal(expense.amount)
        category_totals[expense.category] += amount
        payer_totals[expense.paid_by] += amount
        total_spent += amount
        expense_count += 1

    group_settlements = [s for s in settlements if s.group_id == group_id]
    settled_total = sum((to_decimal(s.amount) for s in group_settlements), Decimal("0"))

    return {
        "total_spent": to_amount(total_spent),
        "expense_count": expense_count,
        "settlement_count": len(group_settlements),
        "category_breakdown": {
            category: to_amount(amount)
            for category, amount in sorted(category_totals.items())
        },
        "payer_totals": {
            person_id: to_amount(amount)
            for person_id, amount in sorted(payer_totals.items())
        },
        "settled_total": to_amount(settled_total)
    }


def balance_status(balance: Balance) -> str:
    """Return GETS_BACK, OWES or SETTLED for a balance."""
    if is_negligible(balance.amount):
        return SETTLED
    return GETS_BACK if balance.amount > 0 else OWES
