"""Organization ORM model. Holds tenant-level display preferences."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Organization(CuidMixin, TimestampMixin, Base):
    """Tenant organization. date_format is a moment-style pattern such as "MM/DD/YYYY"."""

    __tablename__ = "organization"

    organization_name: Mapped[str] = mapped_column(String, nullable=False)
    date_format: Mapped[str | None] = mapped_column(String, nullable=True)
