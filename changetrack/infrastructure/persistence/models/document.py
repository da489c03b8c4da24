"""Document ORM models: owner-linked documents and staged uploads."""

from datetime import datetime

from sqlalchemy import DateTime, Index, SmallInteger, String, text
from sqlalchemy.orm import Mapped, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class EmployeeMappedDocument(CuidMixin, TimestampMixin, Base):
    """Document linked to an owner via (referrable_type, referrable_type_id).

    document_path is the storage folder plus file name; the url and path are
    always derived by the lifecycle manager, never user-entered.
    """

    __tablename__ = "employee_mapped_documents"

    referrable_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    referrable_type_id: Mapped[str | None] = mapped_column(String, nullable=True)
    document_name: Mapped[str | None] = mapped_column(String, nullable=True)
    document_url: Mapped[str | None] = mapped_column(String, nullable=True)
    document_path: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    deleted_by: Mapped[str | None] = mapped_column(String, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    __table_args__ = (
        Index("ix_employee_mapped_documents_referrable", "referrable_type", "referrable_type_id"),
    )


class TempUploadDocument(CuidMixin, Base):
    """Upload waiting in temp storage until a business write promotes it."""

    __tablename__ = "temp_upload_documents"

    document_name: Mapped[str] = mapped_column(String, nullable=False)
    document_url: Mapped[str | None] = mapped_column(String, nullable=True)
    document_path: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )
