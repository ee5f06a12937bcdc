"""Unified command-line interface for tabsplit.

Usage:
    tabsplit scan <text-file> [--no-save]
    tabsplit list
    tabsplit participants <id> --add NAME --remove NAME
    tabsplit assign <id> <item-number> [NAME ...]
    tabsplit split <id> [--beancount]
    tabsplit rename <id> [NAME]
    tabsplit delete <id>
    tabsplit serve [--host --port]
"""
