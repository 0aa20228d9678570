"""
Exceptions Module

Error taxonomy for the group ledger. Every error derives from ValueError so
callers that already map ValueError to a client error keep working.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(ValueError):
    """Base class for ledger data-integrity errors."""


class SplitMismatch(LedgerError):
    """
    Raised when an expense's split amounts do not add up to its total.

    Attributes:
        expense_id (str | None): The offending expense, if known.
        expected (Decimal): The expense total.
        actual (Decimal): The sum of the split amounts.
    """

    def __init__(self, expense_id: Optional[str], expected: Decimal, actual: Decimal):
        self.expense_id = expense_id
        self.expected = expected
        self.actual = actual
        label = f"expense '{expense_id}'" if expense_id else "expense"
        super().__init__(
            f"Splits of {label} total {actual}, expected {expected}"
        )


class UnbalancedLedger(LedgerError):
    """
    Raised when balances do not net to zero within tolerance.

    Attributes:
        residual (Decimal): Sum of the balances (or of the leftovers after a plan).
        balances (list): The Balance entries that remain non-zero.
    """

    def __init__(self, residual: Decimal, balances: Optional[list] = None, group_id: Optional[str] = None):
        self.residual = residual
        self.balances = balances or []
        self.group_id = group_id
        scope = f" for group '{group_id}'" if group_id else ""
        super().__init__(f"Ledger{scope} is unbalanced by {residual}")


class InvalidSettlement(LedgerError):
    """Raised for a settlement that cannot be applied (self-transfer, bad amount)."""

    def __init__(self, settlement_id: Optional[str], reason: str):
        self.settlement_id = settlement_id
        self.reason = reason
        label = f"settlement '{settlement_id}'" if settlement_id else "settlement"
        super().__init__(f"Invalid {label}: {reason}")
