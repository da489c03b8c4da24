"""Audit reader: paginated, human-readable activity listing for one employee."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from changetrack.application.dtos.audit import ActivityItem, AuditPage, AuditRecordRow, Pagination
from changetrack.application.dtos.change_log import ChangeEntry
from changetrack.application.interfaces.repositories import IAuditRecordRepository
from changetrack.application.interfaces.services import IDateFormatProvider
from changetrack.core.config import get_settings
from changetrack.domain.enums import ActionType
from changetrack.domain.exceptions import ValidationException
from changetrack.domain.referrable import UNKNOWN_REFERRABLE_LABEL, target_for
from changetrack.shared.utils.datetime import ensure_utc, format_date

logger = logging.getLogger(__name__)

BLANK = '" "'


def display_value(value: Any) -> str:
    """Value as shown in a message; missing or empty renders as a quoted blank."""
    if value is None or value == "":
        return BLANK
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def render_entry(entry: ChangeEntry) -> str:
    """One change entry as a sentence, e.g. "Chase > Account Number is updated from 111 to 222"."""
    label = entry.label_name
    if entry.action_type is ActionType.CREATED:
        if entry.is_document:
            return f"{entry.value} {label} added"
        return f"{label} > {entry.value} is created"
    if entry.action_type is ActionType.DELETED:
        if entry.is_document:
            return f"{entry.value} {label} deleted"
        return f"{label} > {entry.value} is deleted"
    prefix = f"{entry.reference_name} > " if entry.reference_name else ""
    if entry.is_document and entry.old_value is None and entry.new_value is None:
        return f"{prefix}{label} is updated"
    return (
        f"{prefix}{label} is updated from "
        f"{display_value(entry.old_value)} to {display_value(entry.new_value)}"
    )


def format_timestamp(value: datetime, date_pattern: str) -> str:
    """"<date> at HH:MM AM" in the tenant date pattern (UTC)."""
    value = ensure_utc(value)
    return f"{format_date(value, date_pattern)} at {value.strftime('%I:%M %p')}"


class AuditReader:
    """List an employee's activity with rendered messages and referrable labels."""

    def __init__(
        self,
        repository: IAuditRecordRepository,
        date_formats: IDateFormatProvider,
        default_page_size: int | None = None,
        max_page_size: int | None = None,
    ) -> None:
        settings = get_settings()
        self.repository = repository
        self.date_formats = date_formats
        self.default_page_size = default_page_size or settings.default_page_size
        self.max_page_size = max_page_size or settings.max_page_size

    async def list(
        self,
        owner_id: str,
        page: int = 1,
        page_size: int | None = None,
        referrable_type_id: str | None = None,
        search: str | None = None,
    ) -> AuditPage:
        """Newest-first page of activity plus the total count.

        Raises:
            ValidationException: page or page_size below 1.
        """
        if page < 1:
            raise ValidationException("page must be at least 1", field="page")
        per_page = page_size if page_size is not None else self.default_page_size
        if per_page < 1:
            raise ValidationException("page_size must be at least 1", field="page_size")
        per_page = min(per_page, self.max_page_size)
        search = search.strip() if search else None

        total = await self.repository.count_for_owner(
            owner_id, referrable_type_id=referrable_type_id, search=search
        )
        rows = await self.repository.list_for_owner(
            owner_id,
            skip=(page - 1) * per_page,
            limit=per_page,
            referrable_type_id=referrable_type_id,
            search=search,
        )
        date_pattern = await self.date_formats.get_date_format()
        labels: dict[tuple[int, str], str] = {}
        data = [await self._to_item(row, date_pattern, labels) for row in rows]
        return AuditPage(data=data, pagination=Pagination.build(total, page, per_page))

    async def _to_item(
        self,
        row: AuditRecordRow,
        date_pattern: str,
        labels: dict[tuple[int, str], str],
    ) -> ActivityItem:
        record = row.record
        entries: list[ChangeEntry] = []
        for raw in record.change_log:
            try:
                entries.append(ChangeEntry.from_dict(raw))
            except (KeyError, ValueError, TypeError):
                logger.warning("Skipping malformed change entry in activity %s", record.id)
        return ActivityItem(
            id=record.id,
            activity=record.activity,
            action_type=record.action_type,
            action=record.action_type.label,
            referrable_type_id=record.referrable_type_id,
            referrable_label=await self._referrable_label(
                record.referrable_type, record.referrable_type_id, labels
            ),
            action_by=row.action_by_name,
            created_at=format_timestamp(record.created_at, date_pattern),
            change_log=[render_entry(entry) for entry in entries],
            entries=[entry.to_dict() for entry in entries],
        )

    async def _referrable_label(
        self,
        code: int | None,
        row_id: str | None,
        labels: dict[tuple[int, str], str],
    ) -> str | None:
        """Display label for the referrable row; "Unknown" when it cannot be resolved."""
        if code is None:
            return None
        target = target_for(code)
        if target is None:
            return UNKNOWN_REFERRABLE_LABEL
        if target.is_static:
            return target.static_label
        if row_id is None:
            return None
        key = (code, row_id)
        if key not in labels:
            try:
                label = await self.repository.resolve_label(
                    target.table_name, target.column_name, row_id
                )
            except SQLAlchemyError:
                logger.warning(
                    "Label lookup failed for %s.%s id=%s",
                    target.table_name,
                    target.column_name,
                    row_id,
                    exc_info=True,
                )
                label = None
            labels[key] = label or UNKNOWN_REFERRABLE_LABEL
        return labels[key]
