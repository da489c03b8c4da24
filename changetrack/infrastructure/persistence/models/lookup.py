"""Lookup (configuration) tables joined by snapshot providers for display names."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from changetrack.infrastructure.persistence.database import Base
from changetrack.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class LookupModel(CuidMixin, TimestampMixin):
    """id + name configuration row."""

    __abstract__ = True

    name: Mapped[str] = mapped_column(String, nullable=False)


class Country(LookupModel, Base):
    __tablename__ = "countries"


class State(LookupModel, Base):
    __tablename__ = "states"

    country_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("countries.id", ondelete="SET NULL"), nullable=True, index=True
    )


class RelationshipType(LookupModel, Base):
    __tablename__ = "relationship_types"


class Skill(LookupModel, Base):
    __tablename__ = "skills"


class VisaType(LookupModel, Base):
    __tablename__ = "visa_types"


class DocumentType(LookupModel, Base):
    __tablename__ = "document_types"


class EmploymentType(LookupModel, Base):
    __tablename__ = "employment_types"


class EmployeeCategory(LookupModel, Base):
    __tablename__ = "employee_categories"


class Department(LookupModel, Base):
    __tablename__ = "departments"


class Team(LookupModel, Base):
    __tablename__ = "teams"


class JobTitle(LookupModel, Base):
    __tablename__ = "job_titles"


class Role(LookupModel, Base):
    __tablename__ = "roles"
