"""Reconciliation settings read from the environment."""

from __future__ import annotations

from dataclasses import dataclass

from castlink.domain.reconciliation.replay import DEFAULT_MEMBER_ROLE

from .env import optional_env_var


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    default_member_role: str = DEFAULT_MEMBER_ROLE


def get_reconciliation_config() -> ReconciliationConfig:
    """Return the role given to replayed memberships (``CASTLINK_DEFAULT_MEMBER_ROLE``)."""

    return ReconciliationConfig(
        default_member_role=optional_env_var("CASTLINK_DEFAULT_MEMBER_ROLE", DEFAULT_MEMBER_ROLE),
    )
