"""Persistence models: ORM entities and mixins."""

from changetrack.infrastructure.persistence.models.activity_track import (
    EmployeeProfileActivityTrack,
)
from changetrack.infrastructure.persistence.models.document import (
    EmployeeMappedDocument,
    TempUploadDocument,
)
from changetrack.infrastructure.persistence.models.employee import (
    Employee,
    EmployeeAddress,
    EmployeeEducation,
)
from changetrack.infrastructure.persistence.models.lookup import (
    Country,
    Department,
    DocumentType,
    EmployeeCategory,
    EmploymentType,
    JobTitle,
    RelationshipType,
    Role,
    Skill,
    State,
    Team,
    VisaType,
)
from changetrack.infrastructure.persistence.models.mixins import (
    CuidMixin,
    EmployeeOwnedMixin,
    ProfileModel,
    SoftDeleteMixin,
    TimestampMixin,
    UserAuditMixin,
)
from changetrack.infrastructure.persistence.models.organization import Organization
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

__all__ = [
    "Country",
    "CuidMixin",
    "Department",
    "DocumentType",
    "EmergencyContact",
    "Employee",
    "EmployeeAddress",
    "EmployeeBankAccount",
    "EmployeeCategory",
    "EmployeeDependent",
    "EmployeeEducation",
    "EmployeeI94",
    "EmployeeMappedDocument",
    "EmployeeOwnedMixin",
    "EmployeePassport",
    "EmployeePersonalDocument",
    "EmployeeProfileActivityTrack",
    "EmployeeSkill",
    "EmployeeVacation",
    "EmployeeVisa",
    "EmploymentType",
    "JobTitle",
    "Organization",
    "ProfileModel",
    "RelationshipType",
    "Role",
    "Skill",
    "SoftDeleteMixin",
    "State",
    "Team",
    "TempUploadDocument",
    "TimestampMixin",
    "UserAuditMixin",
    "VisaType",
]
