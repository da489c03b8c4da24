"""SQL snapshot providers, one per tracked employee profile entity kind.

Each provider reads the live row(s), joins lookup tables for display names
and renders every value as a non-null scalar. Label order here is the order
change entries appear in the activity log.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from changetrack.application.dtos.change_log import Snapshot
from changetrack.application.interfaces.services import IDateFormatProvider
from changetrack.application.services.snapshots import (
    EMPTY,
    SnapshotRegistry,
    bank_document_flags,
    dash,
    deposit_type_label,
    render_date,
    render_time,
    text_or_dash,
    yes_no,
)
from changetrack.domain.enums import EntityKind
from changetrack.domain.exceptions import SnapshotNotFound, ValidationException
from changetrack.infrastructure.persistence.models.employee import Employee, EmployeeAddress
from changetrack.infrastructure.persistence.models.lookup import (
    Country,
    DocumentType,
    EmployeeCategory,
    EmploymentType,
    RelationshipType,
    Skill,
    State,
    VisaType,
)
from changetrack.infrastructure.persistence.models.profile import (
    EmergencyContact,
    EmployeeBankAccount,
    EmployeeDependent,
    EmployeeI94,
    EmployeePassport,
    EmployeePersonalDocument,
    EmployeeSkill,
    EmployeeVacation,
    EmployeeVisa,
)

DO_NOT_DISTURB_LABELS = {0: "No", 1: "Yes", 2: "Emergency"}
TIME_ZONE_LABELS = {0: "GST", 1: "GMT", 2: "CAT"}


class SqlSnapshotProvider:
    """Shared plumbing: session, tenant date format, single-row fetch."""

    kind: EntityKind
    key: str = "id"

    def __init__(self, db: AsyncSession, date_formats: IDateFormatProvider) -> None:
        self.db = db
        self.date_formats = date_formats

    def _key(self, condition: Mapping[str, Any]) -> Any:
        value = condition.get(self.key)
        if value is None:
            raise ValidationException(
                f"{self.kind.value} snapshot needs '{self.key}' in its condition", field=self.key
            )
        return value

    async def _one(self, stmt: Select, condition: Mapping[str, Any]) -> Any:
        row = (await self.db.execute(stmt.limit(1))).first()
        if row is None:
            raise SnapshotNotFound(self.kind.value, dict(condition))
        return row

    async def snapshot(
        self, condition: Mapping[str, Any], flags: Mapping[str, Any]
    ) -> Snapshot | list[Snapshot]:
        raise NotImplementedError


class GeneralDetailsSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.GENERAL_DETAILS
    key = "employee_id"

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        manager = aliased(Employee)
        stmt = (
            select(Employee, EmploymentType.name, EmployeeCategory.name, manager.display_name)
            .outerjoin(EmploymentType, EmploymentType.id == Employee.employment_type_id)
            .outerjoin(EmployeeCategory, EmployeeCategory.id == Employee.employee_category_id)
            .outerjoin(manager, manager.id == Employee.reporting_manager_id)
            .where(Employee.id == self._key(condition), Employee.deleted_at.is_(None))
        )
        employee, employment_type, category, manager_name = await self._one(stmt, condition)

        fields: dict[str, Any] = {
            "First Name": employee.first_name,
            "Middle Name": dash(employee.middle_name),
            "Last Name": employee.last_name,
            "Date of Birth": render_date(employee.dob, pattern),
            "Gender": dash(employee.gender),
            "Blood Group": dash(employee.blood_group),
            "Marital Status": dash(employee.marital_status),
            "Email Id": dash(employee.email_id),
            "Mobile Number": dash(employee.contact_number),
            "Alternate Mobile Number": dash(employee.alternate_contact_number),
            "Alternate Email Id": dash(employee.alternate_email_id),
            "Reference Id": dash(employee.reference_id),
            "Joining Date": render_date(employee.date_of_joining, pattern),
            "Employment Type": dash(employment_type),
            "Employment Category": dash(category),
            "SSN": dash(employee.ssn),
            "Is the Employee USC": yes_no(employee.is_us_citizen),
            "Reporting Manager": dash(manager_name),
        }

        address_stmt = (
            select(EmployeeAddress, Country.name, State.name)
            .outerjoin(Country, Country.id == EmployeeAddress.country_id)
            .outerjoin(State, State.id == EmployeeAddress.state_id)
            .where(
                EmployeeAddress.employee_id == employee.id,
                EmployeeAddress.deleted_at.is_(None),
            )
            .order_by(EmployeeAddress.created_at)
            .limit(1)
        )
        address_row = (await self.db.execute(address_stmt)).first()
        # Address labels are always declared; "-" when the employee has no address.
        address, country, state = address_row if address_row is not None else (None, None, None)
        fields.update(
            {
                "Address Line 1": dash(address and address.address_one),
                "Address Line 2": dash(address and address.address_two),
                "City": dash(address and address.city),
                "Country": dash(country),
                "State": dash(state),
                "Zip Code": dash(address and address.zip_code),
            }
        )
        return Snapshot(fields=fields, reference_name=employee.display_name, id=employee.id)


class EmergencyContactSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.EMERGENCY_CONTACT

    async def snapshot(self, condition, flags):
        stmt = (
            select(EmergencyContact, RelationshipType.name, Country.name, State.name)
            .outerjoin(RelationshipType, RelationshipType.id == EmergencyContact.relationship_id)
            .outerjoin(Country, Country.id == EmergencyContact.country_id)
            .outerjoin(State, State.id == EmergencyContact.state_id)
            .where(EmergencyContact.id == self._key(condition), EmergencyContact.deleted_at.is_(None))
        )
        contact, relation, country, state = await self._one(stmt, condition)
        return Snapshot(
            fields={
                "Name": contact.name,
                "Relation": dash(relation),
                "Mobile Number": dash(contact.contact_number),
                "Address Line 1": dash(contact.address_1),
                "Address Line 2": dash(contact.address_2),
                "Zip code": dash(contact.zip_code),
                "City": dash(contact.city),
                "State": dash(state),
                "Country": dash(country),
                "Email ID": dash(contact.email_id),
            },
            reference_name=contact.name,
            id=contact.id,
        )


class SkillSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.SKILL

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeeSkill, Skill.name)
            .outerjoin(Skill, Skill.id == EmployeeSkill.skill_id)
            .where(EmployeeSkill.id == self._key(condition), EmployeeSkill.deleted_at.is_(None))
        )
        skill, skill_name = await self._one(stmt, condition)
        certified = render_date(skill.certification_date, pattern)
        return Snapshot(
            fields={
                "Skill Name": dash(skill_name),
                "Certification ID Or Link": dash(skill.certification),
                "Expertise": dash(skill.expertise),
                "Certified Year": certified or EMPTY,
                "Certification Status": "Active" if skill.certification_status else "In-Active",
                "Years Of Experience": dash(skill.experience_years),
                "Document": bool(flags.get("document", False)),
            },
            reference_name=skill_name or "",
            id=skill.id,
        )


class BankAccountSnapshotProvider(SqlSnapshotProvider):
    """Collection provider: every live account of one employee, oldest first."""

    kind = EntityKind.BANK_ACCOUNT
    key = "employee_id"

    async def snapshot(self, condition, flags):
        stmt = (
            select(EmployeeBankAccount)
            .where(
                EmployeeBankAccount.employee_id == self._key(condition),
                EmployeeBankAccount.deleted_at.is_(None),
            )
            .order_by(EmployeeBankAccount.created_at, EmployeeBankAccount.id)
        )
        accounts = (await self.db.execute(stmt)).scalars().all()
        bank_information = flags.get("bank_information")
        return [
            Snapshot(
                fields={
                    "Bank Name": account.bank_name,
                    "Account Number": account.account_number,
                    "Routing Number": dash(account.routing_number),
                    "Account Type": dash(account.account_type),
                    "Deposit configuration": deposit_type_label(account.deposit_type),
                    "Deposit Value": dash(account.deposit_value),
                },
                reference_name=account.bank_name,
                id=account.id,
                flags=bank_document_flags(bank_information, account.id),
            )
            for account in accounts
        ]


class PassportSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.PASSPORT

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeePassport, Country.name)
            .outerjoin(Country, Country.id == EmployeePassport.issued_country_id)
            .where(EmployeePassport.id == self._key(condition), EmployeePassport.deleted_at.is_(None))
        )
        passport, country = await self._one(stmt, condition)
        return Snapshot(
            fields={
                "Passport Number": passport.document_number,
                "Issued Country": dash(country),
                "Status": "Active" if passport.status else "Expired",
                "Date of Issue": render_date(passport.valid_from, pattern),
                "Date of Expiry": render_date(passport.valid_till, pattern),
                "Passport Document": bool(flags.get("document", False)),
            },
            reference_name=passport.document_number,
            id=passport.id,
        )


class I94SnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.I94

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeeI94, Country.name)
            .outerjoin(Country, Country.id == EmployeeI94.country_id)
            .where(EmployeeI94.id == self._key(condition), EmployeeI94.deleted_at.is_(None))
        )
        i94, country = await self._one(stmt, condition)
        return Snapshot(
            fields={
                "I-94 Number": i94.document_number,
                "Country Name": dash(country),
                "Date of Issue": render_date(i94.valid_from, pattern),
                "Date of Expiry": render_date(i94.valid_till, pattern),
                "Status": "Active" if i94.status == 1 else "Expired",
                "Expiry Type": "Duration of Status" if i94.expiry_type == 1 else "Has Expiry Date",
                "I-94 Document": bool(flags.get("document", False)),
            },
            reference_name=i94.document_number,
            id=i94.id,
        )


class VisaSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.VISA

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeeVisa, VisaType.name)
            .outerjoin(VisaType, VisaType.id == EmployeeVisa.visa_type_id)
            .where(EmployeeVisa.id == self._key(condition), EmployeeVisa.deleted_at.is_(None))
        )
        visa, visa_type = await self._one(stmt, condition)
        return Snapshot(
            fields={
                "Visa Type": dash(visa_type),
                "Visa Number": dash(visa.visa_number),
                "Valid From": render_date(visa.valid_from, pattern),
                "Valid Till": render_date(visa.valid_till, pattern),
                "Supporting Document": bool(flags.get("document", False)),
            },
            reference_name=visa_type or "",
            id=visa.id,
        )


class PersonalDocumentSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.PERSONAL_DOCUMENT

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeePersonalDocument, DocumentType.name)
            .outerjoin(DocumentType, DocumentType.id == EmployeePersonalDocument.document_type_id)
            .where(
                EmployeePersonalDocument.id == self._key(condition),
                EmployeePersonalDocument.deleted_at.is_(None),
            )
        )
        document, document_type = await self._one(stmt, condition)
        return Snapshot(
            fields={
                "Document Type": dash(document_type),
                "Valid From": render_date(document.valid_from, pattern),
                "Valid Till": render_date(document.valid_till, pattern),
                "Document Number": dash(document.document_number),
                "Document Status": "Active" if document.status == 1 else "Expired",
                "Personal Document": bool(flags.get("document", False)),
            },
            reference_name=document.document_number or document_type or "",
            id=document.id,
        )


class DependentSnapshotProvider(SqlSnapshotProvider):
    """Collection provider: every live dependent of one employee, oldest first.

    The "passport" and "i94" flags hold the ids of dependents whose document
    was replaced in this request.
    """

    kind = EntityKind.DEPENDENT
    key = "employee_id"

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = (
            select(EmployeeDependent, VisaType.name, RelationshipType.name)
            .outerjoin(VisaType, VisaType.id == EmployeeDependent.visa_type_id)
            .outerjoin(RelationshipType, RelationshipType.id == EmployeeDependent.relationship_id)
            .where(
                EmployeeDependent.employee_id == self._key(condition),
                EmployeeDependent.deleted_at.is_(None),
            )
            .order_by(EmployeeDependent.created_at, EmployeeDependent.id)
        )
        rows = (await self.db.execute(stmt)).all()
        passport_ids = set(flags.get("passport") or ())
        i94_ids = set(flags.get("i94") or ())
        members = []
        for dependent, visa_type, relation in rows:
            full_name = " ".join(p for p in (dependent.first_name, dependent.last_name) if p)
            members.append(
                Snapshot(
                    fields={
                        "First Name": dependent.first_name,
                        "Middle Name": dash(dependent.middle_name),
                        "Last Name": dash(dependent.last_name),
                        "Email Id": dash(dependent.email_id),
                        "Contact Number": dash(dependent.contact_number),
                        "DOB": render_date(dependent.dob, pattern),
                        "Visa Type": dash(visa_type),
                        "Relationship Type": dash(relation),
                        "SSN": dash(dependent.ssn),
                        "Passport Document": dependent.id in passport_ids,
                        "I-94 Document": dependent.id in i94_ids,
                    },
                    reference_name=full_name,
                    id=dependent.id,
                )
            )
        return members


class VacationSnapshotProvider(SqlSnapshotProvider):
    kind = EntityKind.VACATION

    async def snapshot(self, condition, flags):
        pattern = await self.date_formats.get_date_format()
        stmt = select(EmployeeVacation).where(
            EmployeeVacation.id == self._key(condition), EmployeeVacation.deleted_at.is_(None)
        )
        (vacation,) = await self._one(stmt, condition)
        # Preferred contact window only applies when do-not-disturb is off.
        window = vacation.do_not_disturb == 0
        return Snapshot(
            fields={
                "Name": vacation.name,
                "From Date": render_date(vacation.from_date, pattern),
                "To Date": render_date(vacation.to_date, pattern),
                "Do not disturb": text_or_dash(DO_NOT_DISTURB_LABELS.get(vacation.do_not_disturb)),
                "Preferred From Time": render_time(vacation.preferred_from_time) if window else EMPTY,
                "Preferred To Time": render_time(vacation.preferred_to_time) if window else EMPTY,
                "Time Zone": text_or_dash(TIME_ZONE_LABELS.get(vacation.time_zone)) if window else EMPTY,
            },
            reference_name=vacation.name,
            id=vacation.id,
        )


PROVIDER_CLASSES: tuple[type[SqlSnapshotProvider], ...] = (
    GeneralDetailsSnapshotProvider,
    EmergencyContactSnapshotProvider,
    SkillSnapshotProvider,
    BankAccountSnapshotProvider,
    PassportSnapshotProvider,
    I94SnapshotProvider,
    VisaSnapshotProvider,
    PersonalDocumentSnapshotProvider,
    DependentSnapshotProvider,
    VacationSnapshotProvider,
)


def build_snapshot_registry(
    db: AsyncSession, date_formats: IDateFormatProvider
) -> SnapshotRegistry:
    """Registry with one SQL provider per EntityKind, bound to one session."""
    return SnapshotRegistry([cls(db, date_formats) for cls in PROVIDER_CLASSES])
