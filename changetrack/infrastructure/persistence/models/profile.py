"""Employee profile child tables whose changes are tracked in the activity log."""

from datetime import date, time

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, SmallInteger, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.infrastructure.persistence.models.mixins import ProfileModel


def _lookup_fk(table_name: str) -> Mapped[str | None]:
    return mapped_column(
        String, ForeignKey(f"{table_name}.id", ondelete="SET NULL"), nullable=True
    )


class EmergencyContact(ProfileModel, Base):
    """Table: emergency_contact_information."""

    __tablename__ = "emergency_contact_information"

    name: Mapped[str] = mapped_column(String, nullable=False)
    relationship_id: Mapped[str | None] = _lookup_fk("relationship_types")
    contact_number: Mapped[str | None] = mapped_column(String, nullable=True)
    email_id: Mapped[str | None] = mapped_column(String, nullable=True)
    address_1: Mapped[str | None] = mapped_column(String, nullable=True)
    address_2: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String, nullable=True)
    state_id: Mapped[str | None] = _lookup_fk("states")
    country_id: Mapped[str | None] = _lookup_fk("countries")


class EmployeeSkill(ProfileModel, Base):
    """Table: employee_skill_details."""

    __tablename__ = "employee_skill_details"

    skill_id: Mapped[str | None] = _lookup_fk("skills")
    experience_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    certification: Mapped[str | None] = mapped_column(String, nullable=True)
    certification_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    certification_status: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    expertise: Mapped[str | None] = mapped_column(String, nullable=True)


class EmployeeBankAccount(ProfileModel, Base):
    """Table: employee_bank_account_details. deposit_type: 1 full net, 2 partial $, 3 partial %, 4 remainder."""

    __tablename__ = "employee_bank_account_details"

    bank_name: Mapped[str] = mapped_column(String, nullable=False)
    account_number: Mapped[str] = mapped_column(String, nullable=False)
    routing_number: Mapped[str | None] = mapped_column(String, nullable=True)
    account_type: Mapped[str | None] = mapped_column(String, nullable=True)
    deposit_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    deposit_value: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )


class EmployeePassport(ProfileModel, Base):
    """Table: employee_passport_details."""

    __tablename__ = "employee_passport_details"

    document_number: Mapped[str] = mapped_column(String, nullable=False)
    issued_country_id: Mapped[str | None] = _lookup_fk("countries")
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_till: Mapped[date | None] = mapped_column(Date, nullable=True)


class EmployeeI94(ProfileModel, Base):
    """Table: employee_i94_details. expiry_type: 1 duration of status, else has expiry date."""

    __tablename__ = "employee_i94_details"

    document_number: Mapped[str] = mapped_column(String, nullable=False)
    country_id: Mapped[str | None] = _lookup_fk("countries")
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_till: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=1)
    expiry_type: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=1)


class EmployeeVisa(ProfileModel, Base):
    """Table: employee_visa_details."""

    __tablename__ = "employee_visa_details"

    visa_type_id: Mapped[str | None] = _lookup_fk("visa_types")
    visa_number: Mapped[str | None] = mapped_column(String, nullable=True)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_till: Mapped[date | None] = mapped_column(Date, nullable=True)


class EmployeePersonalDocument(ProfileModel, Base):
    """Table: employee_personal_documents."""

    __tablename__ = "employee_personal_documents"

    document_type_id: Mapped[str | None] = _lookup_fk("document_types")
    document_number: Mapped[str | None] = mapped_column(String, nullable=True)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_till: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=1)
    description: Mapped[str | None] = mapped_column(String, nullable=True)


class EmployeeDependent(ProfileModel, Base):
    """Table: employee_dependent_details."""

    __tablename__ = "employee_dependent_details"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    email_id: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String, nullable=True)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    visa_type_id: Mapped[str | None] = _lookup_fk("visa_types")
    relationship_id: Mapped[str | None] = _lookup_fk("relationship_types")
    ssn: Mapped[str | None] = mapped_column(String, nullable=True)


class EmployeeVacation(ProfileModel, Base):
    """Table: employee_vacation. do_not_disturb: 0 no, 1 yes, 2 emergency; time_zone: 0 GST, 1 GMT, 2 CAT."""

    __tablename__ = "employee_vacation"

    name: Mapped[str] = mapped_column(String, nullable=False)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)
    do_not_disturb: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    preferred_from_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    preferred_to_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    time_zone: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
