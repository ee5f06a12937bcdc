from pathlib import Path

import pytest

from tabsplit.receipt.text_parser.common import DEFAULT_PARSER_RULES, LineKind, classify_line
from tabsplit.receipt.text_result_parser import parse_receipt
from tabsplit.runtime.parser_rules import build_parser_rules, load_parser_rules
from tabsplit.runtime.paths import get_paths


def test_missing_rules_file_uses_defaults(tmp_path: Path) -> None:
    assert load_parser_rules(str(tmp_path / "missing.toml")) is DEFAULT_PARSER_RULES


def test_empty_config_uses_defaults() -> None:
    assert build_parser_rules({}) is DEFAULT_PARSER_RULES


def test_toml_override_extends_tip_keywords(tmp_path: Path) -> None:
    rules_path = tmp_path / "parser_rules.toml"
    rules_path.write_text('[totals]\ntip = ["tip", "Propina"]\n', encoding="utf-8")

    rules = load_parser_rules(str(rules_path))

    assert rules.tip == ("tip", "propina")
    assert rules.tax == DEFAULT_PARSER_RULES.tax
    assert "propina" in rules.all_totals_keywords
    assert classify_line("Propina 5.00", rules) is LineKind.TOTALS

    parsed = parse_receipt(["Tacos 20.00", "Subtotal 20.00", "Propina 5.00", "Total 25.00"], rules=rules)
    assert parsed.tip is not None
    assert parsed.tip.cents == 500
    assert [item.name for item in parsed.items] == ["Tacos"]


def test_rules_file_in_data_directory_is_picked_up() -> None:
    paths = get_paths()
    paths.ensure_directories()
    paths.parser_rules.write_text('[metadata]\nkeywords = ["cashier"]\n', encoding="utf-8")

    rules = load_parser_rules()

    assert rules.metadata == ("cashier",)
    assert classify_line("Cashier Ana 2", rules) is LineKind.METADATA
    # Replaced, not merged
    assert classify_line("Server Ana 2.00", rules) is LineKind.ITEM_CANDIDATE


@pytest.mark.parametrize(
    "config",
    [
        {"totals": {"tip": "tip"}},
        {"totals": {"tip": ["tip", 3]}},
        {"totals": {"tip": [""]}},
        {"totals": ["tip"]},
        {"metadata": {"keywords": "server"}},
    ],
)
def test_invalid_tables_are_rejected(config: dict) -> None:
    with pytest.raises(ValueError):
        build_parser_rules(config)
