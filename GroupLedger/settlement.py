"""
Settlement Module

This module converts net balances into a list of transfers that, once
made, bring every balance to zero.

Features:
    - Greedy creditor-by-creditor matching in input order
    - Decimal working copies; caller's balances are never touched
    - Tiny rounding leftovers (<= 0.01) are ignored

Data Model:
    Input - balances: list of Balance
        - amount > 0: creditor (receives money)
        - amount < 0: debtor (pays money)

    Output - list of TransferInstruction:
        - from_person_id: debtor who pays
        - to_person_id: creditor who receives
        - amount: float (rounded to 2 decimal places)

Functions:
    optimize_settlements: Convert balances into settlement transfers.
    residual_balances: Apply transfers to balances and return what is left.
"""

import logging
from decimal import Decimal

from money import EPSILON, to_amount, to_decimal
from records import Balance, TransferInstruction


logger = logging.getLogger(__name__)


def optimize_settlements(balances: list[Balance]) -> list[TransferInstruction]:
    """
    Convert net balances into settlement transfers.

    Uses a greedy scan:
        1. Split people into creditors (amount > 0) and debtors (amount < 0),
           keeping input order; anyone within EPSILON of zero is skipped
        2. For each creditor, walk the debtors in order
        3. Transfer min(creditor remaining, debtor remaining) when it is
           larger than EPSILON, and reduce both remainders
        4. Stop when either side runs out

    This is not the minimum number of transfers. It yields at most
    creditors + debtors - 1 transfers, and which pairs get matched depends
    on input order. Pass balances from calculate_balances() to get pairs
    ordered by person_id.

    Args:
        balances: Net balances, expected to sum to ~0.

    Returns:
        list[TransferInstruction]: Transfers in the order they were matched.
        Empty when there are no creditors or no debtors.

    Notes:
        - Does NOT modify input balances
        - A balance set that does not sum to ~0 leaves a remainder unmatched
          instead of failing; see residual_balances
    """
    # Working copies: [person_id, remaining] with remaining stored as positive
    creditors = []
    debtors = []
    for balance in balances:
        amount = to_decimal(balance.amount)
        if amount > EPSILON:
            creditors.append([balance.person_id, amount])
        elif amount < -EPSILON:
            debtors.append([balance.person_id, -amount])

    transfers = []
    for creditor in creditors:
        for debtor in debtors:
            if creditor[1] <= 0:
                break
            if debtor[1] <= 0:
                continue

            amount = min(creditor[1], debtor[1])
            if amount <= EPSILON:
                continue

            transfers.append(TransferInstruction(
                from_person_id=debtor[0],
                to_person_id=creditor[0],
                amount=to_amount(amount)
            ))
            creditor[1] -= amount
            debtor[1] -= amount

    logger.debug(
        "Planned %d transfers for %d creditors and %d debtors",
        len(transfers), len(creditors), len(debtors)
    )
    return transfers


def residual_balances(
    balances: list[Balance],
    transfers: list[TransferInstruction]
) -> list[Balance]:
    """
    Apply transfers to a copy of the balances.

    Each transfer raises the payer's balance by its amount and lowers the
    receiver's balance by the same amount.

    Args:
        balances: Starting balances.
        transfers: Transfers to apply.

    Returns:
        list[Balance]: Balances after every transfer, in input order. People
        who only appear in transfers are appended at the end.
    """
    remaining: dict[str, Decimal] = {}
    for balance in balances:
        remaining[balance.person_id] = remaining.get(balance.person_id, Decimal("0")) + to_decimal(balance.amount)

    for transfer in transfers:
        amount = to_decimal(transfer.amount)
        remaining[transfer.from_person_id] = remaining.get(transfer.from_person_id, Decimal("0")) + amount
        remaining[transfer.to_person_id] = remaining.get(transfer.to_person_id, Decimal("0")) - amount

    return [
        Balance(person_id=person_id, amount=to_amount(amount))
        for person_id, amount in remaining.items()
    ]
