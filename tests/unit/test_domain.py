"""Tests for domain enums, referrable targets and exceptions."""

import pytest

from changetrack.domain.enums import ActionType, EntityKind, ReferrableType, Signal
from changetrack.domain.exceptions import (
    AuditPersistenceError,
    ChangeTrackException,
    DiffSerializationError,
    DocumentAlreadyAbsent,
    DocumentMoveError,
    ResourceNotFoundException,
    SnapshotNotFound,
    SqlNotConfiguredException,
    ValidationException,
)
from changetrack.domain.referrable import (
    ACTIVITY_PATHS,
    ENTITY_REFERRABLE_TYPES,
    REFERRABLE_TARGETS,
    ReferrableTarget,
    target_for,
)


class TestEnums:
    def test_action_type_codes_and_labels(self) -> None:
        assert ActionType.values() == [1, 2, 3]
        assert [a.label for a in ActionType] == ["Created", "Edited", "Deleted"]

    def test_signal_for_action(self) -> None:
        assert Signal.for_action(ActionType.CREATED) is Signal.ENTITY_CREATED
        assert Signal.for_action(ActionType.UPDATED) is Signal.ENTITY_UPDATED
        assert Signal.for_action(ActionType.DELETED) is Signal.ENTITY_DELETED

    def test_bank_accounts_and_dependents_are_collections(self) -> None:
        assert [k for k in EntityKind if k.is_collection] == [
            EntityKind.BANK_ACCOUNT,
            EntityKind.DEPENDENT,
        ]

    def test_collection_labels(self) -> None:
        assert EntityKind.BANK_ACCOUNT.collection_label == "Bank Name"
        assert EntityKind.DEPENDENT.collection_label == "Dependent Name"


class TestReferrableTargets:
    def test_every_code_is_mapped(self) -> None:
        assert set(REFERRABLE_TARGETS) == set(ReferrableType)

    def test_every_entity_kind_has_path_and_type(self) -> None:
        assert set(ACTIVITY_PATHS) == set(EntityKind)
        assert set(ENTITY_REFERRABLE_TYPES) == set(EntityKind)

    def test_target_for(self) -> None:
        assert target_for(None) is None
        assert target_for(999) is None
        passport = target_for(int(ReferrableType.PASSPORT))
        assert (passport.table_name, passport.column_name) == (
            "employee_passport_details",
            "document_number",
        )
        assert target_for(int(ReferrableType.DEPOSIT_FORM_DOCUMENT)).static_label == "W-4 Form Document"

    def test_target_needs_column_or_label(self) -> None:
        with pytest.raises(ValueError):
            ReferrableTarget("employee")

    def test_clause_exposes_label_column(self) -> None:
        target = ReferrableTarget("employee", "display_name")
        assert target.label_column().name == "display_name"

    def test_static_target_has_no_clause(self) -> None:
        with pytest.raises(ValueError):
            ReferrableTarget(None, static_label="W-4 Form Document").clause()


class TestExceptions:
    def test_base_default_error_code(self) -> None:
        exc = ChangeTrackException("Something failed")
        assert exc.error_code == "ChangeTrackException"
        assert exc.to_dict() == {
            "error": "ChangeTrackException",
            "message": "Something failed",
            "details": {},
        }

    def test_validation_exception(self) -> None:
        exc = ValidationException("Invalid", field="page")
        assert exc.error_code == "VALIDATION_ERROR"
        assert exc.details == {"field": "page"}

    def test_resource_not_found(self) -> None:
        exc = ResourceNotFoundException("Document", "doc_1")
        assert exc.error_code == "RESOURCE_NOT_FOUND"
        assert exc.message == "Document not found: doc_1"

    def test_snapshot_not_found_stringifies_condition(self) -> None:
        exc = SnapshotNotFound("vacation", {"id": 5})
        assert exc.details["condition"] == {"id": "5"}

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (DiffSerializationError("nan"), "DIFF_SERIALIZATION_ERROR"),
            (AuditPersistenceError("emp_1", "down"), "AUDIT_PERSISTENCE_ERROR"),
            (DocumentMoveError("a/b.pdf", "disk"), "DOCUMENT_MOVE_ERROR"),
            (DocumentAlreadyAbsent("a/b.pdf"), "DOCUMENT_ALREADY_ABSENT"),
            (SqlNotConfiguredException(), "SERVICE_UNAVAILABLE"),
        ],
    )
    def test_error_codes(self, exc: ChangeTrackException, code: str) -> None:
        assert exc.error_code == code

    def test_document_move_error_is_generic_to_users(self) -> None:
        assert DocumentMoveError("a/b.pdf", "disk full").message == "Could not save document"
