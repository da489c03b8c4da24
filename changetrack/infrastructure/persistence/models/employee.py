"""Employee ORM models: the profile root, its address and education rows."""

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.infrastructure.persistence.models.mixins import (
    CuidMixin,
    ProfileModel,
    UserAuditMixin,
)


class Employee(CuidMixin, UserAuditMixin, Base):
    """Employee profile. Table: employee. display_name is the actor name in activity listings."""

    __tablename__ = "employee"

    display_name: Mapped[str] = mapped_column(String, nullable=False)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    blood_group: Mapped[str | None] = mapped_column(String, nullable=True)
    marital_status: Mapped[str | None] = mapped_column(String, nullable=True)
    email_id: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String, nullable=True)
    alternate_contact_number: Mapped[str | None] = mapped_column(String, nullable=True)
    alternate_email_id: Mapped[str | None] = mapped_column(String, nullable=True)
    reference_id: Mapped[str | None] = mapped_column(String, nullable=True)
    date_of_joining: Mapped[date | None] = mapped_column(Date, nullable=True)
    employment_type_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employment_types.id", ondelete="SET NULL"), nullable=True
    )
    employee_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee_categories.id", ondelete="SET NULL"), nullable=True
    )
    reporting_manager_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True
    )
    ssn: Mapped[str | None] = mapped_column(String, nullable=True)
    is_us_citizen: Mapped[bool | None] = mapped_column(Boolean, nullable=True)


class EmployeeAddress(ProfileModel, Base):
    """Current address. Table: employee_address_details."""

    __tablename__ = "employee_address_details"

    address_one: Mapped[str | None] = mapped_column(String, nullable=True)
    address_two: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    state_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("states.id", ondelete="SET NULL"), nullable=True
    )
    country_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("countries.id", ondelete="SET NULL"), nullable=True
    )
    zip_code: Mapped[str | None] = mapped_column(String, nullable=True)


class EmployeeEducation(ProfileModel, Base):
    """Education history row. Table: employee_education_details."""

    __tablename__ = "employee_education_details"

    university_name: Mapped[str] = mapped_column(String, nullable=False)
    degree: Mapped[str | None] = mapped_column(String, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
