"""/v1/transactions - log, edit and delete ledger entries"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from orbit_ledger.api.dependencies import get_ledger, get_request_id
from orbit_ledger.api.v1.schemas import TransactionListResponse, TransactionRequest, TransactionResponse
from orbit_ledger.domain.exceptions import InvalidTransactionDataError, TransactionNotFoundError
from orbit_ledger.services.ledger import OrbitLedger

router = APIRouter()


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(ledger: OrbitLedger = Depends(get_ledger)):
    """All transactions in insertion order"""
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in ledger.transactions]
    )


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request_body: TransactionRequest,
    request: Request,
    ledger: OrbitLedger = Depends(get_ledger),
):
    try:
        txn = ledger.add_transaction(request_body.to_draft())
    except InvalidTransactionDataError as e:
        logging.warning(f"Rejected transaction: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return TransactionResponse.model_validate(txn)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    request_body: TransactionRequest,
    request: Request,
    ledger: OrbitLedger = Depends(get_ledger),
):
    """Replace amount, type, category, note and date; id and creation time are kept"""
    try:
        txn = ledger.edit_transaction(transaction_id, request_body.to_draft())
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransactionDataError as e:
        logging.warning(f"Rejected transaction edit: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return TransactionResponse.model_validate(txn)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, ledger: OrbitLedger = Depends(get_ledger)):
    try:
        ledger.delete_transaction(transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=204)
