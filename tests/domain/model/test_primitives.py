from __future__ import annotations

import pytest

from castlink.domain.model import Account, normalize_email, normalize_phone


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Someone@Example.COM ", "someone@example.com"),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_email(raw: str | None, expected: str | None) -> None:
    assert normalize_email(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("+44 20 7946 0958", "+442079460958"),
        ("(555) 010.2030", "5550102030"),
        ("555-010-2030", "5550102030"),
        (" ", None),
        (None, None),
    ],
)
def test_normalize_phone(raw: str | None, expected: str | None) -> None:
    assert normalize_phone(raw) == expected


def test_account_requires_email() -> None:
    with pytest.raises(ValueError, match="email"):
        Account(email="  ", first_name="Ada", last_name="Lane")
