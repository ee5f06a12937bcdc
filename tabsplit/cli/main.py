#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Callable, Sequence

from tabsplit.runtime.logging import set_log_level


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that signals failure with sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tabsplit",
        description="Split scanned receipts between people",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <text-file>           Parse recognized receipt text and store a draft
  list                       List stored receipts
  participants <id>          Add or remove participants
  assign <id> <item> [NAME..]
                             Assign one item to participants (none = unassign)
  split <id>                 Show per-person totals
  rename <id> [NAME]         Set the display name (no name = use merchant)
  delete <id>                Delete a stored receipt
  serve [--host --port]      Start the HTTP API

Receipt ids may be abbreviated to any unique prefix.
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser decisions at DEBUG level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Parse recognized receipt text")
    scan_parser.add_argument("text_file", help="Text file with one recognized line per line, in reading order")
    scan_parser.add_argument("--no-save", action="store_true", help="Only print the parse result")
    scan_parser.add_argument("--rules", default=None, help="Parser rules TOML (default: config/parser_rules.toml)")

    subparsers.add_parser("list", help="List stored receipts")

    participants_parser = subparsers.add_parser("participants", help="Add or remove participants")
    participants_parser.add_argument("receipt_id", help="Receipt id (or unique prefix)")
    participants_parser.add_argument("--add", action="append", default=[], metavar="NAME", help="Add a participant")
    participants_parser.add_argument(
        "--remove", action="append", default=[], metavar="NAME", help="Remove a participant"
    )

    assign_parser = subparsers.add_parser("assign", help="Assign an item to participants")
    assign_parser.add_argument("receipt_id", help="Receipt id (or unique prefix)")
    assign_parser.add_argument("item_number", type=int, help="Item number as shown by 'split' or 'scan'")
    assign_parser.add_argument("names", nargs="*", help="Participant names")

    split_parser = subparsers.add_parser("split", help="Show per-person totals")
    split_parser.add_argument("receipt_id", help="Receipt id (or unique prefix)")
    split_parser.add_argument("--beancount", action="store_true", help="Print a beancount transaction instead")
    split_parser.add_argument("--payer", default="Liabilities:CreditCard", help="Payer account for --beancount")
    split_parser.add_argument("--currency", default="USD", help="Currency for --beancount")

    rename_parser = subparsers.add_parser("rename", help="Rename a stored receipt")
    rename_parser.add_argument("receipt_id", help="Receipt id (or unique prefix)")
    rename_parser.add_argument("name", nargs="?", default=None, help="New display name; omit to clear")

    delete_parser = subparsers.add_parser("delete", help="Delete a stored receipt")
    delete_parser.add_argument("receipt_id", help="Receipt id (or unique prefix)")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        set_log_level(logging.DEBUG)

    from tabsplit.cli import receipt as commands

    handlers: dict[str, Callable[[argparse.Namespace], None]] = {
        "scan": commands.cmd_scan,
        "list": commands.cmd_list,
        "participants": commands.cmd_participants,
        "assign": commands.cmd_assign,
        "split": commands.cmd_split,
        "rename": commands.cmd_rename,
        "delete": commands.cmd_delete,
        "serve": commands.cmd_serve,
    }
    return _run_command(handlers[args.command], args)


if __name__ == "__main__":
    raise SystemExit(main())
