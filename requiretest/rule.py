"""Rule metadata and the message table for the require-test check."""

from __future__ import annotations

RULE_ID = "require-test"
UNCHECKED_RULE_ID = "require-test/unchecked-export"

RULE_META = {
    "type": "suggestion",
    "description": "Every exported function must be imported by at least one test file",
    "category": "Best Practices",
    "recommended": "error",
}

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "missing_test": "Write a test for this exported function",
        "unchecked_export": "This export's shape is not checked for test coverage",
    },
    "ja": {
        "missing_test": "関数にテストを必ず書いてください",
        "unchecked_export": "この export の形式はテストの有無を確認できません",
    },
}

DEFAULT_LOCALE = "en"


def message_for(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Look up a message, falling back to the default locale."""
    table = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    return table.get(key) or MESSAGES[DEFAULT_LOCALE][key]
