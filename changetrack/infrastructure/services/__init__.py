"""Infrastructure implementations of application service interfaces."""

from changetrack.infrastructure.services.date_format import (
    OrganizationDateFormatProvider,
    StaticDateFormatProvider,
)

__all__ = ["OrganizationDateFormatProvider", "StaticDateFormatProvider"]
