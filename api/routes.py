"""HTTP routes for block lookup, subscriptions and transaction queries."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import PlainTextResponse

from api.dependencies import get_parser_service
from core.exceptions import TxWatchError, ValidationError
from core.logging import get_logger
from core.validators import validate_address
from watcher.service import ParserService

router = APIRouter(tags=["txwatch"])
LOGGER = get_logger("txwatch.api")


def _require_address(address: str | None) -> str:
    if not address:
        raise HTTPException(status_code=400, detail="Address not provided")
    try:
        validate_address(address)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid address: {e.message}") from e
    return address


@router.get("/getBlock")
async def get_block(
    service: ParserService = Depends(get_parser_service),
) -> dict[str, Any]:
    """Latest block number and its raw transaction list."""

    try:
        snapshot = await service.latest_block()
    except TxWatchError as e:
        LOGGER.error("Error fetching block details", extra={"context": e.to_dict()})
        raise HTTPException(status_code=500, detail=f"Error fetching block details: {e}") from e
    return snapshot.to_dict()


@router.api_route("/subscribe", methods=["GET", "POST"], response_class=PlainTextResponse)
def subscribe(
    address_header: str | None = Header(default=None, alias="address"),
    address_query: str | None = Query(default=None, alias="address"),
    service: ParserService = Depends(get_parser_service),
) -> str:
    """Subscribe to an address given in the `address` header or query parameter."""

    address = _require_address(address_header or address_query)
    if not service.subscribe(address):
        raise HTTPException(status_code=400, detail="Already subscribed")
    return f"Subscribed to address: {address}\n"


@router.get("/getTransactions")
async def get_transactions(
    address: str | None = Query(default=None),
    service: ParserService = Depends(get_parser_service),
) -> list[dict[str, Any]]:
    """Transactions in the latest block involving `address`."""

    address = _require_address(address)
    transactions = await service.transactions_for(address)
    return [tx.to_dict() for tx in transactions]


@router.get("/health")
def health(service: ParserService = Depends(get_parser_service)) -> dict[str, Any]:
    return {"status": "ok", **service.health()}
