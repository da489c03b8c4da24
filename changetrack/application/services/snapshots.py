"""Snapshot provider registry and value rendering shared by providers.

Providers turn one entity (or one employee's collection) into a Snapshot of
human labels. Concrete SQL providers live in
changetrack.infrastructure.persistence.snapshot_providers; this module holds
the contract, the registry and the pure rendering rules.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from typing import Any, Protocol

from changetrack.application.dtos.change_log import Scalar, Snapshot
from changetrack.domain.enums import EntityKind
from changetrack.domain.exceptions import SnapshotNotFound
from changetrack.shared.utils.datetime import format_date

logger = logging.getLogger(__name__)

EMPTY = "-"

DEPOSIT_TYPE_LABELS: dict[int, str] = {
    1: "Full Net",
    2: "Partial $",
    3: "Partial %",
    4: "Remainder",
}

VOID_CHEQUE_FLAG = "void_cheque_document_modified"
DEPOSIT_FORM_FLAG = "deposit_form_document_modified"


class ISnapshotProvider(Protocol):
    """Builds the current snapshot of one entity kind."""

    kind: EntityKind

    async def snapshot(
        self, condition: Mapping[str, Any], flags: Mapping[str, Any]
    ) -> Snapshot | list[Snapshot]:
        """Raise SnapshotNotFound when no row matches condition."""


def dash(value: Any) -> Scalar:
    """Optional value, or "-" when missing or blank."""
    if value is None or value == "":
        return EMPTY
    return value


def text_or_dash(value: Any) -> str:
    """Optional value as text, or "-" when missing or blank."""
    rendered = dash(value)
    return rendered if isinstance(rendered, str) else str(rendered)


def render_date(value: date | datetime | None, pattern: str) -> str:
    """Date in the tenant pattern; empty string when missing."""
    return format_date(value, pattern, empty="")


def render_time(value: time | None) -> str:
    """HH:MM (seconds dropped), or "-" when missing."""
    return value.strftime("%H:%M") if value is not None else EMPTY


def deposit_type_label(code: int | None) -> str:
    return DEPOSIT_TYPE_LABELS.get(code, EMPTY) if code is not None else EMPTY


def yes_no(value: bool | None) -> str:
    if value is None:
        return EMPTY
    return "Yes" if value else "No"


def bank_document_flags(
    bank_information: Sequence[Mapping[str, Any]] | None, bank_id: str | None
) -> dict[str, bool]:
    """Which bank documents the request replaced for one account.

    A document counts as replaced when the request's entry for the account
    carries a new_document_id for it.
    """
    entry: Mapping[str, Any] = {}
    for candidate in bank_information or ():
        if str(candidate.get("id")) == str(bank_id):
            entry = candidate
            break

    def _replaced(key: str) -> bool:
        documents = entry.get(key) or []
        return bool(documents and documents[0].get("new_document_id"))

    return {
        VOID_CHEQUE_FLAG: _replaced("void_cheque_documents"),
        DEPOSIT_FORM_FLAG: _replaced("deposit_form_documents"),
    }


class SnapshotRegistry:
    """Maps each EntityKind to its provider."""

    def __init__(self, providers: Sequence[ISnapshotProvider] = ()) -> None:
        self._providers: dict[EntityKind, ISnapshotProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ISnapshotProvider) -> None:
        self._providers[provider.kind] = provider

    def __contains__(self, kind: object) -> bool:
        return kind in self._providers

    def provider_for(self, kind: EntityKind) -> ISnapshotProvider:
        try:
            return self._providers[kind]
        except KeyError:
            raise LookupError(f"No snapshot provider registered for {kind.value}") from None

    async def snapshot(
        self,
        kind: EntityKind,
        condition: Mapping[str, Any],
        flags: Mapping[str, Any] | None = None,
    ) -> Snapshot | list[Snapshot]:
        """Current snapshot of `kind` matching condition; raises SnapshotNotFound."""
        return await self.provider_for(kind).snapshot(condition, flags or {})


async def safe_snapshot(
    registry: SnapshotRegistry,
    kind: EntityKind,
    condition: Mapping[str, Any],
    flags: Mapping[str, Any] | None = None,
) -> Snapshot | list[Snapshot] | None:
    """Like registry.snapshot, but a missing row means "no state" (None)."""
    try:
        return await registry.snapshot(kind, condition, flags)
    except SnapshotNotFound:
        logger.info("No %s row for %s; treating as no prior state", kind.value, dict(condition))
        return None
