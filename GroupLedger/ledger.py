"""
Ledger Module

Entry points the rest of the application calls. Holds no state: every call
recomputes from the records it is given.

Functions:
    compute_balances: Net balance per person for one group.
    compute_settlement_plan: Transfers that zero a set of balances.
    summarize_group: Balances, transfers and analytics in one call.
"""

import logging
from typing import Optional

from config import config
from money import EPSILON, is_negligible, to_amount, to_decimal
from records import Balance, ExpenseRecord, SettlementRecord, TransferInstruction
from splitter import balance_total, calculate_balances, validate_expense, validate_settlement
from settlement import optimize_settlements, residual_balances
from analytics import balance_status, generate_group_summary
from exceptions import UnbalancedLedger


logger = logging.getLogger(__name__)


def compute_balances(
    expenses: list[ExpenseRecord],
    settlements: list[SettlementRecord],
    group_id: str,
    strict: Optional[bool] = None
) -> list[Balance]:
    """
    Compute each person's net balance within a group.

    Args:
        expenses: Expense records (any group; filtered by group_id).
        settlements: Settlement records (any group; filtered by group_id).
        group_id: The group to compute.
        strict: Validate records and the zero-sum invariant. Defaults to
            config.STRICT_SPLITS.

    Returns:
        list[Balance]: Sorted by person_id. Empty for a group with no activity.

    Raises:
        SplitMismatch: strict mode, an expense's splits do not match its amount.
        InvalidSettlement: strict mode, a settlement cannot be applied.
        UnbalancedLedger: strict mode, balances do not sum to ~0.
    """
    if strict is None:
        strict = config.STRICT_SPLITS

    if strict:
        for expense in expenses:
            if expense.group_id == group_id:
                validate_expense(expense)
        for settlement in settlements:
            if settlement.group_id == group_id:
                validate_settlement(settlement)

    balances = calculate_balances(expenses, settlements, group_id)

    total = balance_total(balances)
    if abs(total) > EPSILON:
        if strict:
            offending = [b for b in balances if not is_negligible(b.amount)]
            raise UnbalancedLedger(total, offending, group_id)
        logger.warning("Balances for group %s sum to %s instead of 0", group_id, total)

    return balances


def compute_settlement_plan(
    balances: list[Balance],
    group_id: Optional[str] = None
) -> list[TransferInstruction]:
    """
    Compute transfers that bring every balance to zero.

    Args:
        balances: Net balances, normally from compute_balances().
        group_id: Group the balances belong to, used in error reports only.

    Returns:
        list[TransferInstruction]: Empty when everyone is already settled.

    Raises:
        UnbalancedLedger: If anyone is left more than EPSILON away from zero
            after the plan. Happens when the balances do not sum to ~0, or
            when several sub-cent debts together owe one larger credit.
            Carries the balances left over after the plan.
    """
    transfers = optimize_settlements(balances)

    leftover = [
        b for b in residual_balances(balances, transfers)
        if abs(to_decimal(b.amount)) > EPSILON
    ]
    if leftover:
        total = balance_total(balances)
        if abs(total) <= EPSILON:
            # Sums to zero, so report the credit nobody was matched against
            total = balance_total([b for b in leftover if b.amount > 0])
        raise UnbalancedLedger(total, leftover, group_id)

    return transfers


def summarize_group(
    expenses: list[ExpenseRecord],
    settlements: list[SettlementRecord],
    group_id: str,
    strict: Optional[bool] = None
) -> dict:
    """Balances, settlement plan and analytics for one group."""
    balances = compute_balances(expenses, settlements, group_id, strict=strict)
    transfers = compute_settlement_plan(balances, group_id)
    summary = generate_group_summary(expenses, settlements, group_id)
    summary["outstanding_total"] = to_amount(sum(t.amount for t in transfers))
    summary["statuses"] = {b.person_id: balance_status(b) for b in balances}
    return {
        "group_id": group_id,
        "balances": balances,
        "transfers": transfers,
        "analytics": summary
    }
