"""
Records Module

This module defines the immutable records the ledger reads and the derived
values it produces.

Data Model:
    ExpenseSplit - share of one expense owed by one person:
        - person_id: string
        - amount: float (>= 0)

    ExpenseRecord - a shared cost paid by one person:
        - id: string
        - group_id: string
        - description: string
        - amount: float (must be > 0)
        - paid_by: string (person_id of payer)
        - splits: list of ExpenseSplit
        - category: string
        - date: string (YYYY-MM-DD)
        - created_at: string or None

    SettlementRecord - a repayment between two people:
        - id: string
        - group_id: string
        - from_person_id: string (person paying back)
        - to_person_id: string (person receiving)
        - amount: float (must be > 0)
        - date: string (YYYY-MM-DD)

    Balance - derived, never stored:
        - person_id: string
        - amount: float (positive = gets back, negative = owes)

    TransferInstruction - derived recommendation:
        - from_person_id: string (debtor who pays)
        - to_person_id: string (creditor who receives)
        - amount: float (rounded to 2 decimal places)

All records are frozen: assigning to a field raises a ValidationError.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    def to_dict(self) -> dict:
        """Convert record to a plain dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict):
        """Create a record from a dictionary, validating every field."""
        return cls.model_validate(data)


class ExpenseSplit(_Record):
    """The portion of one expense attributed to one person."""
    person_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)


class ExpenseRecord(_Record):
    """
    A shared cost recorded for a group.

    The payer may appear in its own splits; their net effect is then
    amount - own share.
    """
    id: str = Field(..., min_length=1)
    group_id: str = Field(..., min_length=1)
    description: str = ""
    amount: float = Field(..., gt=0)
    paid_by: str = Field(..., min_length=1)
    splits: tuple[ExpenseSplit, ...] = ()
    category: str = "general"
    date: str = Field(..., pattern=DATE_PATTERN)
    created_at: Optional[str] = None


class SettlementRecord(_Record):
    """A recorded repayment from one person to another."""
    id: str = Field(..., min_length=1)
    group_id: str = Field(..., min_length=1)
    from_person_id: str = Field(..., min_length=1)
    to_person_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    date: str = Field(..., pattern=DATE_PATTERN)

    @model_validator(mode="after")
    def _check_parties(self):
        if self.from_person_id == self.to_person_id:
            raise ValueError("from_person_id and to_person_id must differ")
        return self


class Balance(_Record):
    person_id: str
    amount: float


class TransferInstruction(_Record):
    from_person_id: str
    to_person_id: str
    amount: float
