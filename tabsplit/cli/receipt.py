"""Receipt command handlers used by the unified CLI."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from tabsplit.runtime import get_logger, load_parser_rules
from tabsplit.runtime.receipt_storage import ReceiptNotFoundError, ReceiptStore, get_receipt_store

logger = get_logger(__name__)


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}")
    sys.exit(1)


def _resolve_receipt_id(store: ReceiptStore, prefix: str) -> str:
    try:
        return store.resolve_id(prefix)
    except (ReceiptNotFoundError, ValueError) as exc:
        _fail(str(exc))


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from tabsplit.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_scan(args: argparse.Namespace) -> None:
    """Parse a recognized-text file and store the draft receipt."""
    from tabsplit.application.receipts.scan import ReceiptScanRequest, run_receipt_scan
    from tabsplit.receipt.formatter import format_parsed_receipt

    try:
        rules = load_parser_rules(args.rules)
    except ValueError as exc:
        _fail(f"Invalid parser rules: {exc}")

    result = run_receipt_scan(
        ReceiptScanRequest(
            text_path=Path(args.text_file),
            rules=rules,
            store=None if args.no_save else get_receipt_store(),
        )
    )

    if result.status in ("file_not_found", "unreadable"):
        logger.error("%s", result.error)
        _fail(result.error or "could not read receipt text")

    assert result.parsed is not None
    print("=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(format_parsed_receipt(result.parsed), end="")
    print("=" * 60)

    if result.status == "saved" and result.receipt is not None:
        print(f"Saved receipt {result.receipt.id}")


def cmd_list(args: argparse.Namespace) -> None:
    """List stored receipts, newest first."""
    from tabsplit.application.receipts.listing import run_list_receipts

    summaries = run_list_receipts(get_receipt_store())
    if not summaries:
        print("No receipts stored yet.")
        return

    for summary in summaries:
        total = summary.total.format() if summary.total is not None else "-"
        status = "assigned" if summary.fully_assigned else "unassigned items"
        print(
            f"{summary.id[:8]}  {summary.created_at:%Y-%m-%d}  {summary.name:<30}  "
            f"{total:>10}  {summary.item_count:>3} items  ({status})"
        )


def cmd_participants(args: argparse.Namespace) -> None:
    """Add and remove participants on a stored receipt."""
    from tabsplit.application.receipts.assign import ParticipantsEditRequest, run_edit_participants

    store = get_receipt_store()
    receipt_id = _resolve_receipt_id(store, args.receipt_id)
    try:
        receipt = run_edit_participants(
            store,
            ParticipantsEditRequest(receipt_id=receipt_id, add=args.add, remove=args.remove),
        )
    except ValueError as exc:
        _fail(str(exc))

    names = ", ".join(p.name for p in receipt.participants) or "(none)"
    print(f"Participants: {names}")


def cmd_assign(args: argparse.Namespace) -> None:
    """Assign one item of a stored receipt to participants."""
    from tabsplit.application.receipts.assign import ItemAssignRequest, run_assign_item
    from tabsplit.receipt.formatter import format_receipt

    store = get_receipt_store()
    receipt_id = _resolve_receipt_id(store, args.receipt_id)
    try:
        receipt = run_assign_item(
            store,
            ItemAssignRequest(receipt_id=receipt_id, item_number=args.item_number, names=args.names),
        )
    except ValueError as exc:
        _fail(str(exc))

    print(format_receipt(receipt), end="")


def cmd_split(args: argparse.Namespace) -> None:
    """Print per-person totals (or a beancount transaction) for a stored receipt."""
    from tabsplit.application.receipts.split import run_receipt_split
    from tabsplit.receipt.formatter import format_people_totals, format_receipt, format_split_beancount

    store = get_receipt_store()
    result = run_receipt_split(store, _resolve_receipt_id(store, args.receipt_id))

    if args.beancount:
        print(
            format_split_beancount(
                result.receipt,
                result.allocation,
                payer_account=args.payer,
                currency=args.currency,
            ),
            end="",
        )
        return

    print(format_receipt(result.receipt))
    print(format_people_totals(result.receipt, result.allocation), end="")


def cmd_rename(args: argparse.Namespace) -> None:
    """Set or clear the display name of a stored receipt."""
    from tabsplit.application.receipts.manage import ReceiptRenameRequest, run_rename_receipt

    store = get_receipt_store()
    receipt_id = _resolve_receipt_id(store, args.receipt_id)
    receipt = run_rename_receipt(store, ReceiptRenameRequest(receipt_id=receipt_id, name=args.name))
    print(f"Renamed receipt {receipt.id[:8]} to {receipt.resolved_name}")


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete a stored receipt."""
    from tabsplit.application.receipts.manage import run_delete_receipt

    store = get_receipt_store()
    receipt = run_delete_receipt(store, _resolve_receipt_id(store, args.receipt_id))
    print(f"Deleted receipt {receipt.id[:8]} ({receipt.resolved_name})")
