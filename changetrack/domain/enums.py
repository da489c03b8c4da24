"""Domain enumerations for change tracking.

ActionType codes are persisted (SMALLINT) and must never be renumbered.
Signal values are the dispatcher channel names business services publish on.
"""

from enum import Enum, IntEnum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to Enums."""

    @classmethod
    def values(cls) -> list:
        """Return all valid values."""
        return [member.value for member in cls]


class ActionType(_ValuesMixin, IntEnum):
    """What happened to the audited record."""

    CREATED = 1
    UPDATED = 2
    DELETED = 3

    @property
    def label(self) -> str:
        """Past-tense display label used by listings."""
        return {1: "Created", 2: "Edited", 3: "Deleted"}[self.value]


class Signal(_ValuesMixin, str, Enum):
    """Dispatcher signal names."""

    ENTITY_CREATED = "entity-created"
    ENTITY_UPDATED = "entity-updated"
    ENTITY_DELETED = "entity-deleted"

    @classmethod
    def for_action(cls, action_type: ActionType) -> "Signal":
        """Signal carrying the given action type."""
        return {
            ActionType.CREATED: cls.ENTITY_CREATED,
            ActionType.UPDATED: cls.ENTITY_UPDATED,
            ActionType.DELETED: cls.ENTITY_DELETED,
        }[action_type]


class EntityKind(_ValuesMixin, str, Enum):
    """Trackable employee profile entity kinds (one snapshot provider each)."""

    GENERAL_DETAILS = "general_details"
    EMERGENCY_CONTACT = "emergency_contact"
    SKILL = "skill"
    BANK_ACCOUNT = "bank_account"
    PASSPORT = "passport"
    I94 = "i94"
    VISA = "visa"
    PERSONAL_DOCUMENT = "personal_document"
    DEPENDENT = "dependent"
    VACATION = "vacation"

    @property
    def is_collection(self) -> bool:
        """True when the kind snapshots as a list of id-keyed records."""
        return self in (EntityKind.BANK_ACCOUNT, EntityKind.DEPENDENT)

    @property
    def collection_label(self) -> str:
        """Label naming a member added to or removed from the collection."""
        return "Dependent Name" if self is EntityKind.DEPENDENT else "Bank Name"


class ChangeSlug(_ValuesMixin, str, Enum):
    """Marks a change entry as something other than a plain field change."""

    DOCUMENT = "document"


class ReferrableType(_ValuesMixin, IntEnum):
    """Which kind of entity an audit or document row refers to.

    Persisted as an integer. The label resolution for every member lives in
    changetrack.domain.referrable (checked at import time).
    """

    EMPLOYEE = 1
    EMERGENCY_CONTACT = 2
    PASSPORT = 3
    I94 = 4
    VISA = 5
    PERSONAL_DOCUMENT = 6
    SKILL = 7
    BANK_ACCOUNT = 8
    EDUCATION = 9
    ADDRESS = 10
    VOID_CHEQUE_DOCUMENT = 11
    DEPENDENT = 12
    VACATION = 13
    DEPOSIT_FORM_DOCUMENT = 14
    EMPLOYEE_CATEGORY = 15
    EMPLOYMENT_TYPE = 16
    DEPARTMENT = 17
    TEAM = 18
    RELATIONSHIP_TYPE = 19
    SKILL_MASTER = 20
    VISA_TYPE = 21
    DOCUMENT_TYPE = 22
    COUNTRY = 23
    STATE = 24
    JOB_TITLE = 25
    ROLE = 26
    INVOICE_CONFIGURATION = 27
    TIMESHEET_CONFIGURATION = 28
