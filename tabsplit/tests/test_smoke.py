"""Public smoke tests for basic module wiring.

Keep these minimal and free of any real-world data.
"""

from __future__ import annotations


def test_imports() -> None:
    import tabsplit.application.receipts
    import tabsplit.cli.main
    import tabsplit.domain
    import tabsplit.receipt.text_parser
    import tabsplit.runtime

    assert tabsplit.application.receipts is not None
    assert tabsplit.cli.main is not None
    assert tabsplit.domain is not None
    assert tabsplit.receipt.text_parser is not None
    assert tabsplit.runtime is not None
