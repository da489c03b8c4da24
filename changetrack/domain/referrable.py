"""Closed mapping from ReferrableType to the table/column that names it.

Used by the audit reader to turn (referrable_type, referrable_type_id) into a
display label. Targets are lightweight sqlalchemy table() clauses so the
lookup tables owned by other services need no ORM model here.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, TableClause, column, table

from changetrack.domain.enums import EntityKind, ReferrableType

UNKNOWN_REFERRABLE_LABEL = "Unknown"


@dataclass(frozen=True)
class ReferrableTarget:
    """Where a referrable label comes from: a column lookup or a fixed label."""

    table_name: str | None
    column_name: str | None = None
    static_label: str | None = None

    def __post_init__(self) -> None:
        if self.static_label is None and not (self.table_name and self.column_name):
            raise ValueError("ReferrableTarget needs table and column, or a static label")

    @property
    def is_static(self) -> bool:
        return self.static_label is not None

    def clause(self) -> TableClause:
        """Table clause exposing id and the label column."""
        if not (self.table_name and self.column_name):
            raise ValueError(f"Static target {self.static_label!r} has no lookup table")
        return table(self.table_name, column("id"), column(self.column_name))

    def label_column(self) -> ColumnElement:
        return self.clause().c[self.column_name]


def _lookup(table_name: str, column_name: str = "name") -> ReferrableTarget:
    return ReferrableTarget(table_name, column_name)


REFERRABLE_TARGETS: dict[ReferrableType, ReferrableTarget] = {
    ReferrableType.EMPLOYEE: _lookup("employee", "display_name"),
    ReferrableType.EMERGENCY_CONTACT: _lookup("emergency_contact_information"),
    ReferrableType.PASSPORT: _lookup("employee_passport_details", "document_number"),
    ReferrableType.I94: _lookup("employee_i94_details", "document_number"),
    ReferrableType.VISA: _lookup("employee_visa_details", "visa_number"),
    ReferrableType.PERSONAL_DOCUMENT: _lookup("employee_personal_documents", "document_number"),
    ReferrableType.SKILL: _lookup("employee_skill_details", "certification"),
    ReferrableType.BANK_ACCOUNT: _lookup("employee_bank_account_details", "bank_name"),
    ReferrableType.EDUCATION: _lookup("employee_education_details", "university_name"),
    ReferrableType.ADDRESS: _lookup("employee_address_details", "city"),
    ReferrableType.VOID_CHEQUE_DOCUMENT: ReferrableTarget(None, static_label="Void Cheque Document"),
    ReferrableType.DEPENDENT: _lookup("employee_dependent_details", "first_name"),
    ReferrableType.VACATION: _lookup("employee_vacation"),
    ReferrableType.DEPOSIT_FORM_DOCUMENT: ReferrableTarget(None, static_label="W-4 Form Document"),
    ReferrableType.EMPLOYEE_CATEGORY: _lookup("employee_categories"),
    ReferrableType.EMPLOYMENT_TYPE: _lookup("employment_types"),
    ReferrableType.DEPARTMENT: _lookup("departments"),
    ReferrableType.TEAM: _lookup("teams"),
    ReferrableType.RELATIONSHIP_TYPE: _lookup("relationship_types"),
    ReferrableType.SKILL_MASTER: _lookup("skills"),
    ReferrableType.VISA_TYPE: _lookup("visa_types"),
    ReferrableType.DOCUMENT_TYPE: _lookup("document_types"),
    ReferrableType.COUNTRY: _lookup("countries"),
    ReferrableType.STATE: _lookup("states"),
    ReferrableType.JOB_TITLE: _lookup("job_titles"),
    ReferrableType.ROLE: _lookup("roles"),
    ReferrableType.INVOICE_CONFIGURATION: ReferrableTarget(None, static_label="Invoice Configuration"),
    ReferrableType.TIMESHEET_CONFIGURATION: ReferrableTarget(None, static_label="Timesheet Configuration"),
}

_missing = set(ReferrableType) - set(REFERRABLE_TARGETS)
if _missing:
    raise RuntimeError(
        f"ReferrableType members without a label target: {sorted(m.name for m in _missing)}"
    )


def target_for(code: int | None) -> ReferrableTarget | None:
    """Return the target for a stored code; None for null or unknown codes."""
    if code is None:
        return None
    try:
        return REFERRABLE_TARGETS[ReferrableType(code)]
    except ValueError:
        return None


ENTITY_REFERRABLE_TYPES: dict[EntityKind, ReferrableType] = {
    EntityKind.GENERAL_DETAILS: ReferrableType.EMPLOYEE,
    EntityKind.EMERGENCY_CONTACT: ReferrableType.EMERGENCY_CONTACT,
    EntityKind.SKILL: ReferrableType.SKILL,
    EntityKind.BANK_ACCOUNT: ReferrableType.BANK_ACCOUNT,
    EntityKind.PASSPORT: ReferrableType.PASSPORT,
    EntityKind.I94: ReferrableType.I94,
    EntityKind.VISA: ReferrableType.VISA,
    EntityKind.PERSONAL_DOCUMENT: ReferrableType.PERSONAL_DOCUMENT,
    EntityKind.DEPENDENT: ReferrableType.DEPENDENT,
    EntityKind.VACATION: ReferrableType.VACATION,
}

ACTIVITY_PATHS: dict[EntityKind, str] = {
    EntityKind.GENERAL_DETAILS: "User Profile > General Details",
    EntityKind.EMERGENCY_CONTACT: "User Profile > General Details > Emergency Contact",
    EntityKind.SKILL: "User Profile > Skills",
    EntityKind.BANK_ACCOUNT: "User Profile > Pay Configuration > Bank Details",
    EntityKind.PASSPORT: "User Profile > Documents > Work Authorization > Passport",
    EntityKind.I94: "User Profile > Documents > Work Authorization > I-94",
    EntityKind.VISA: "User Profile > Documents > Work Authorization > Visa",
    EntityKind.PERSONAL_DOCUMENT: "User Profile > Documents > Personal Documents",
    EntityKind.DEPENDENT: "User Profile > Dependents",
    EntityKind.VACATION: "User Profile > Vacation",
}
