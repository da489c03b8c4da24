"""Tenant date format lookup (implements IDateFormatProvider)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.core.config import get_settings
from changetrack.infrastructure.persistence.models.organization import Organization


class OrganizationDateFormatProvider:
    """Reads organization.date_format; falls back to settings.default_date_format.

    The value is read once per provider instance, which lives for one unit of
    work (one request or one audit signal).
    """

    def __init__(self, db: AsyncSession, default_format: str | None = None) -> None:
        self.db = db
        self._default = default_format or get_settings().default_date_format
        self._cached: str | None = None

    async def get_date_format(self) -> str:
        if self._cached is None:
            result = await self.db.execute(
                select(Organization.date_format)
                .where(Organization.date_format.is_not(None))
                .order_by(Organization.created_at)
                .limit(1)
            )
            self._cached = result.scalar_one_or_none() or self._default
        return self._cached


class StaticDateFormatProvider:
    """Fixed format; used where no organization row is available."""

    def __init__(self, date_format: str) -> None:
        self._date_format = date_format

    async def get_date_format(self) -> str:
        return self._date_format
