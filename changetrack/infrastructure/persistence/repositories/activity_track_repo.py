"""Activity track repository. Append-only; implements IAuditRecordRepository."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.application.dtos.audit import (
    AuditRecordCreate,
    AuditRecordResult,
    AuditRecordRow,
)
from changetrack.domain.enums import ActionType
from changetrack.domain.referrable import ReferrableTarget
from changetrack.infrastructure.persistence.models.activity_track import (
    EmployeeProfileActivityTrack,
)
from changetrack.infrastructure.persistence.models.employee import Employee
from changetrack.infrastructure.persistence.repositories.base import BaseRepository, escape_like
from changetrack.shared.utils.datetime import ensure_utc, utc_now
from changetrack.shared.utils.generators import generate_cuid


def _orm_to_result(row: EmployeeProfileActivityTrack) -> AuditRecordResult:
    """Map ORM to application DTO."""
    return AuditRecordResult(
        id=row.id,
        employee_id=row.employee_id,
        referrable_type=row.referrable_type,
        referrable_type_id=row.referrable_type_id,
        action_type=ActionType(row.action_type),
        activity=row.activity,
        change_log=list(row.change_log or []),
        created_by=row.created_by,
        created_at=ensure_utc(row.created_at),
    )


class ActivityTrackRepository(BaseRepository[EmployeeProfileActivityTrack]):
    """Append-only activity track repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EmployeeProfileActivityTrack)

    async def append(self, entry: AuditRecordCreate) -> AuditRecordResult:
        """Append one activity record; return the created record."""
        row = EmployeeProfileActivityTrack(
            id=generate_cuid(),
            employee_id=entry.employee_id,
            referrable_type=entry.referrable_type,
            referrable_type_id=entry.referrable_type_id,
            action_type=int(entry.action_type),
            activity=entry.activity,
            change_log=json.loads(entry.change_log),
            created_by=entry.created_by,
            created_at=utc_now(),
        )
        await self._add(row)
        return _orm_to_result(row)

    def _conditions(
        self,
        employee_id: str,
        referrable_type_id: str | None,
        search: str | None,
    ) -> list[Any]:
        conditions: list[Any] = [EmployeeProfileActivityTrack.employee_id == employee_id]
        if referrable_type_id is not None:
            conditions.append(
                EmployeeProfileActivityTrack.referrable_type_id == referrable_type_id
            )
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(EmployeeProfileActivityTrack.activity.ilike(pattern, escape="\\"))
        return conditions

    async def list_for_owner(
        self,
        employee_id: str,
        *,
        skip: int = 0,
        limit: int = 10,
        referrable_type_id: str | None = None,
        search: str | None = None,
    ) -> list[AuditRecordRow]:
        """List an employee's activity, newest first, with the actor's display name."""
        stmt = (
            select(EmployeeProfileActivityTrack, Employee.display_name)
            .outerjoin(Employee, Employee.id == EmployeeProfileActivityTrack.created_by)
            .where(and_(*self._conditions(employee_id, referrable_type_id, search)))
            .order_by(
                EmployeeProfileActivityTrack.created_at.desc(),
                EmployeeProfileActivityTrack.id.desc(),
            )
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [
            AuditRecordRow(record=_orm_to_result(row), action_by_name=name)
            for row, name in result.all()
        ]

    async def count_for_owner(
        self,
        employee_id: str,
        *,
        referrable_type_id: str | None = None,
        search: str | None = None,
    ) -> int:
        """Count records matching the same filters as list_for_owner."""
        stmt = select(func.count(EmployeeProfileActivityTrack.id)).where(
            and_(*self._conditions(employee_id, referrable_type_id, search))
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def resolve_label(self, table_name: str, column_name: str, row_id: str) -> str | None:
        """Read the display column of one referrable row."""
        clause = ReferrableTarget(table_name, column_name).clause()
        stmt = select(clause.c[column_name]).where(clause.c.id == row_id).limit(1)
        result = await self.db.execute(stmt)
        value = result.scalar_one_or_none()
        return str(value) if value is not None else None
