"""Employee profile activity track ORM model. Append-only change log."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Connection, DateTime, Index, SmallInteger, String, Text, event, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.shared.utils.generators import generate_cuid


class EmployeeProfileActivityTrack(Base):
    """One audited business action on an employee profile. No update/delete.

    change_log holds the ordered list of change entries for the action.
    """

    __tablename__ = "employee_profile_activity_track"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    employee_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    referrable_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    referrable_type_id: Mapped[str | None] = mapped_column(String, nullable=True)
    action_type: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    activity: Mapped[str] = mapped_column(Text, nullable=False)
    change_log: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )

    __table_args__ = (
        Index("ix_activity_track_employee_created", "employee_id", "created_at"),
    )


@event.listens_for(EmployeeProfileActivityTrack, "before_update")
def _prevent_activity_track_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: EmployeeProfileActivityTrack
) -> None:
    """Activity track rows are append-only; updates are forbidden."""
    raise ValueError("Activity track entries are immutable and cannot be updated.")


@event.listens_for(EmployeeProfileActivityTrack, "before_delete")
def _prevent_activity_track_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: EmployeeProfileActivityTrack
) -> None:
    """Activity track rows cannot be deleted."""
    raise ValueError("Activity track entries cannot be deleted.")
