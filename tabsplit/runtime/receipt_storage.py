"""Storage and retrieval of finalized receipts.

Receipts live in a single JSON file (a list, newest first) under the data
directory. Split results are never stored; they are recomputed on demand.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from tabsplit.domain.receipt import Receipt
from tabsplit.receipt.serialization import receipt_from_dict, receipt_to_dict
from tabsplit.runtime.logging import get_logger
from tabsplit.runtime.paths import get_paths

logger = get_logger(__name__)


class ReceiptNotFoundError(LookupError):
    """No stored receipt has the requested id."""

    def __init__(self, receipt_id: str) -> None:
        super().__init__(f"Receipt not found: {receipt_id}")
        self.receipt_id = receipt_id


class ReceiptStore:
    """JSON-file backed receipt collection."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[Receipt]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("receipt store must contain a list")
            return [receipt_from_dict(entry) for entry in raw]
        except (OSError, ValueError) as exc:
            logger.warning("Could not read receipt store %s: %s", self.path, exc)
            return []

    def _save(self, receipts: list[Receipt]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([receipt_to_dict(r) for r in receipts], indent=2, ensure_ascii=False)

        # Write to a sibling temp file then replace, so readers never see a partial file.
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".receipts-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def list(self) -> list[Receipt]:
        return self._load()

    def get(self, receipt_id: str) -> Receipt:
        for receipt in self._load():
            if receipt.id == receipt_id:
                return receipt
        raise ReceiptNotFoundError(receipt_id)

    def add(self, receipt: Receipt) -> Receipt:
        receipts = self._load()
        receipts.insert(0, receipt)
        self._save(receipts)
        logger.info("Saved receipt %s (%s)", receipt.id, receipt.resolved_name)
        return receipt

    def update(self, receipt: Receipt) -> Receipt:
        receipts = self._load()
        for index, existing in enumerate(receipts):
            if existing.id == receipt.id:
                receipts[index] = receipt
                self._save(receipts)
                logger.info("Updated receipt %s", receipt.id)
                return receipt
        raise ReceiptNotFoundError(receipt.id)

    def delete(self, receipt_id: str) -> None:
        receipts = self._load()
        remaining = [r for r in receipts if r.id != receipt_id]
        if len(remaining) == len(receipts):
            raise ReceiptNotFoundError(receipt_id)
        self._save(remaining)
        logger.info("Deleted receipt %s", receipt_id)

    def resolve_id(self, prefix: str) -> str:
        """Expand a unique id prefix (as typed on the command line) to a full id."""
        matches = [r.id for r in self._load() if r.id.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise ReceiptNotFoundError(prefix)
        raise ValueError(f"Receipt id prefix {prefix!r} is ambiguous")


def get_receipt_store() -> ReceiptStore:
    """Receipt store at the configured data directory."""
    return ReceiptStore(get_paths().receipts_store)
