"""FastAPI server exposing receipt parsing and splitting over HTTP."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from tabsplit.application.receipts.manage import ReceiptRenameRequest, run_delete_receipt, run_rename_receipt
from tabsplit.domain.allocation import compute_allocation
from tabsplit.receipt.serialization import (
    allocation_to_dict,
    parsed_receipt_to_dict,
    receipt_from_dict,
    receipt_to_dict,
)
from tabsplit.receipt.text_result_parser import parse_receipt
from tabsplit.runtime import get_logger, load_parser_rules
from tabsplit.runtime.receipt_storage import ReceiptNotFoundError, ReceiptStore, get_receipt_store

logger = get_logger(__name__)

app = FastAPI(title="Receipt Splitter")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@app.exception_handler(ReceiptNotFoundError)
async def receipt_not_found(_request: Request, exc: ReceiptNotFoundError) -> JSONResponse:
    return _error(str(exc), 404)


@app.post("/parse")
async def parse_lines(request: Request) -> JSONResponse:
    """Parse recognized lines: {"lines": [...], "full_text": "..."}."""
    body = await _json_body(request)
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object", 400)

    lines = body.get("lines")
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        return _error("'lines' must be a list of strings", 400)
    full_text = body.get("full_text")
    if full_text is None:
        full_text = "\n".join(lines)
    elif not isinstance(full_text, str):
        return _error("'full_text' must be a string", 400)

    parsed = parse_receipt(lines, full_text, rules=load_parser_rules())
    logger.info("Parsed %d lines into %d items", len(lines), len(parsed.items))
    return JSONResponse(parsed_receipt_to_dict(parsed))


@app.post("/allocate")
async def allocate(request: Request) -> JSONResponse:
    """Split a receipt sent in the request body."""
    body = await _json_body(request)
    try:
        receipt = receipt_from_dict(body)
    except ValueError as exc:
        return _error(f"Invalid receipt: {exc}", 400)
    return JSONResponse(allocation_to_dict(compute_allocation(receipt)))


@app.get("/receipts")
async def list_receipts(store: ReceiptStore = Depends(get_receipt_store)) -> dict[str, Any]:
    return {
        "receipts": [
            {
                "id": receipt.id,
                "name": receipt.resolved_name,
                "created_at": receipt.created_at.isoformat(),
                "total_cents": receipt.total.cents if receipt.total is not None else None,
                "items": len(receipt.items),
                "fully_assigned": receipt.is_fully_assigned,
            }
            for receipt in store.list()
        ]
    }


@app.get("/receipts/{receipt_id}")
async def get_receipt(receipt_id: str, store: ReceiptStore = Depends(get_receipt_store)) -> dict[str, Any]:
    return receipt_to_dict(store.get(receipt_id))


@app.put("/receipts/{receipt_id}/name")
async def rename_stored_receipt(
    receipt_id: str, request: Request, store: ReceiptStore = Depends(get_receipt_store)
) -> JSONResponse:
    """Set the display name: {"name": "..."}; null or blank clears it."""
    body = await _json_body(request)
    if not isinstance(body, dict) or "name" not in body:
        return _error("Request body must be a JSON object with a 'name' key", 400)
    name = body["name"]
    if name is not None and not isinstance(name, str):
        return _error("'name' must be a string or null", 400)

    receipt = run_rename_receipt(store, ReceiptRenameRequest(receipt_id=receipt_id, name=name))
    return JSONResponse(receipt_to_dict(receipt))


@app.delete("/receipts/{receipt_id}")
async def delete_stored_receipt(receipt_id: str, store: ReceiptStore = Depends(get_receipt_store)) -> dict[str, str]:
    run_delete_receipt(store, receipt_id)
    logger.info("Deleted receipt %s over HTTP", receipt_id)
    return {"status": "deleted", "id": receipt_id}


@app.get("/receipts/{receipt_id}/allocation")
async def get_receipt_allocation(
    receipt_id: str, store: ReceiptStore = Depends(get_receipt_store)
) -> dict[str, Any]:
    return allocation_to_dict(compute_allocation(store.get(receipt_id)))


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
