"""Small value helpers shared by the identity and shadow-record models."""

from __future__ import annotations

import re
from datetime import UTC, datetime

_PHONE_SEPARATORS = re.compile(r"[\s\-.()/]")


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def normalize_email(value: str | None) -> str | None:
    """Trim and lower-case an email; blank values become ``None``."""

    if value is None:
        return None
    stripped = value.strip().lower()
    return stripped or None


def normalize_phone(value: str | None) -> str | None:
    """Strip formatting characters from a phone number.

    Only separators are removed and a single leading ``+`` is kept, so two
    numbers compare equal exactly when their digits (and international prefix)
    do. Blank values become ``None``.
    """

    if value is None:
        return None
    compact = _PHONE_SEPARATORS.sub("", value.strip())
    if not compact:
        return None
    if compact.startswith("+"):
        return "+" + compact[1:].replace("+", "")
    return compact
