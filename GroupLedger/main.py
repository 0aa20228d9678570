"""
Group Ledger - FastAPI Web Backend

Stateless HTTP adapter over the ledger. Each request carries the records it
needs and gets back a fresh computation; nothing is stored.

Endpoints:
    POST /groups/{group_id}/balances         - Net balance per person
    POST /groups/{group_id}/settlement-plan  - Balances plus transfers
    POST /groups/{group_id}/summary          - Balances, transfers, analytics
    POST /settlement-plan                    - Transfers for given balances
    POST /expenses/validate                  - Check an expense's splits
    GET  /health                             - Health check

Usage:
    uvicorn main:app --reload
"""

import logging
from typing import Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from config import config
from records import Balance, ExpenseRecord, SettlementRecord, TransferInstruction
from ledger import compute_balances, compute_settlement_plan, summarize_group
from splitter import validate_expense
from exceptions import LedgerError, UnbalancedLedger


logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models for Request/Response Validation
# =============================================================================

class LedgerRequest(BaseModel):
    """Request model carrying a group's full history."""
    expenses: list[ExpenseRecord] = Field(default_factory=list, description="Expense records")
    settlements: list[SettlementRecord] = Field(default_factory=list, description="Settlement records")
    strict: Optional[bool] = Field(None, description="Override LEDGER_STRICT_SPLITS for this request")


class PlanRequest(BaseModel):
    """Request model for planning transfers from known balances."""
    balances: list[Balance]


class BalancesResponse(BaseModel):
    group_id: str
    balances: list[Balance]


class GroupPlanResponse(BaseModel):
    group_id: str
    balances: list[Balance]
    transfers: list[TransferInstruction]


class PlanResponse(BaseModel):
    transfers: list[TransferInstruction]


class SummaryResponse(BaseModel):
    group_id: str
    balances: list[Balance]
    transfers: list[TransferInstruction]
    analytics: dict


class ValidationResponse(BaseModel):
    expense_id: str
    valid: bool


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=config.API_TITLE,
    description="Balances and settle-up plans for shared group expenses",
    version="1.0.0"
)


# =============================================================================
# Helper Functions
# =============================================================================

def _ledger_error(e: LedgerError) -> HTTPException:
    """Map a ledger error to an HTTP error."""
    status_code = 409 if isinstance(e, UnbalancedLedger) else 400
    logger.info("Rejected ledger request: %s", e)
    return HTTPException(status_code=status_code, detail=str(e))


# =============================================================================
# API Endpoints
# =============================================================================

@app.post("/groups/{group_id}/balances", response_model=BalancesResponse)
async def group_balances(group_id: str, request: LedgerRequest):
    """Net balance per person for a group."""
    try:
        balances = compute_balances(
            request.expenses, request.settlements, group_id, strict=request.strict
        )
        return BalancesResponse(group_id=group_id, balances=balances)

    except LedgerError as e:
        raise _ledger_error(e)
    except Exception as e:
        logger.exception("Balance computation failed for group %s", group_id)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/groups/{group_id}/settlement-plan", response_model=GroupPlanResponse)
async def group_settlement_plan(group_id: str, request: LedgerRequest):
    """
    Balances and the transfers that settle them.

    Request flow:
        1. Compute balances from the posted records
        2. Plan transfers from the balances
        3. Return both
    """
    try:
        balances = compute_balances(
            request.expenses, request.settlements, group_id, strict=request.strict
        )
        transfers = compute_settlement_plan(balances, group_id)
        return GroupPlanResponse(group_id=group_id, balances=balances, transfers=transfers)

    except LedgerError as e:
        raise _ledger_error(e)
    except Exception as e:
        logger.exception("Settlement planning failed for group %s", group_id)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/groups/{group_id}/summary", response_model=SummaryResponse)
async def group_summary(group_id: str, request: LedgerRequest):
    """Balances, transfers and spending totals for a group."""
    try:
        result = summarize_group(
            request.expenses, request.settlements, group_id, strict=request.strict
        )
        return SummaryResponse(**result)

    except LedgerError as e:
        raise _ledger_error(e)
    except Exception as e:
        logger.exception("Summary failed for group %s", group_id)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/settlement-plan", response_model=PlanResponse)
async def settlement_plan(request: PlanRequest):
    """Transfers for balances the caller already holds."""
    try:
        return PlanResponse(transfers=compute_settlement_plan(request.balances))

    except LedgerError as e:
        raise _ledger_error(e)
    except Exception as e:
        logger.exception("Settlement planning failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/expenses/validate", response_model=ValidationResponse)
async def validate_expense_splits(expense: ExpenseRecord):
    """Check that an expense's splits add up to its amount."""
    try:
        validate_expense(expense)
        return ValidationResponse(expense_id=expense.id, valid=True)

    except LedgerError as e:
        raise _ledger_error(e)


# =============================================================================
# Health Check Endpoint
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint to verify API is running."""
    return {"status": "healthy", "service": config.API_TITLE}


# =============================================================================
# Run with: python main.py
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
