"""Unit tests for AuditReader: message rendering, pagination and referrable labels."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from changetrack.application.dtos.audit import AuditRecordResult, AuditRecordRow
from changetrack.application.dtos.change_log import ChangeEntry
from changetrack.application.services.audit_reader import (
    AuditReader,
    display_value,
    format_timestamp,
    render_entry,
)
from changetrack.domain.enums import ActionType, ChangeSlug, ReferrableType
from changetrack.domain.exceptions import ValidationException
from changetrack.infrastructure.services.date_format import StaticDateFormatProvider


def _row(
    record_id: str = "act_1",
    change_log: list[dict] | None = None,
    referrable_type: int | None = None,
    referrable_type_id: str | None = None,
    action_by_name: str | None = "John Admin",
) -> AuditRecordRow:
    return AuditRecordRow(
        record=AuditRecordResult(
            id=record_id,
            employee_id="emp_1",
            referrable_type=referrable_type,
            referrable_type_id=referrable_type_id,
            action_type=ActionType.UPDATED,
            activity="User Profile > General Details",
            change_log=change_log or [],
            created_by="emp_2",
            created_at=datetime(2024, 3, 5, 14, 7, tzinfo=UTC),
        ),
        action_by_name=action_by_name,
    )


def _repository(rows: list[AuditRecordRow], total: int | None = None) -> MagicMock:
    repo = MagicMock()
    repo.list_for_owner = AsyncMock(return_value=rows)
    repo.count_for_owner = AsyncMock(return_value=len(rows) if total is None else total)
    repo.resolve_label = AsyncMock(return_value="X123")
    return repo


def _reader(repo: MagicMock) -> AuditReader:
    return AuditReader(
        repo, StaticDateFormatProvider("MM/DD/YYYY"), default_page_size=10, max_page_size=50
    )


class TestRenderEntry:
    def test_updated(self) -> None:
        entry = ChangeEntry(
            label_name="Account Number",
            action_type=ActionType.UPDATED,
            old_value="111",
            new_value="222",
            reference_name="Chase",
        )
        assert render_entry(entry) == "Chase > Account Number is updated from 111 to 222"

    def test_updated_without_reference(self) -> None:
        entry = ChangeEntry(
            label_name="City", action_type=ActionType.UPDATED, old_value="A", new_value="B"
        )
        assert render_entry(entry) == "City is updated from A to B"

    def test_updated_blank_values(self) -> None:
        entry = ChangeEntry(
            label_name="City", action_type=ActionType.UPDATED, old_value="", new_value="B"
        )
        assert render_entry(entry) == 'City is updated from " " to B'

    def test_created_and_deleted(self) -> None:
        created = ChangeEntry(label_name="Bank Name", action_type=ActionType.CREATED, value="Chase")
        deleted = ChangeEntry(label_name="Bank Name", action_type=ActionType.DELETED, value="Chase")
        assert render_entry(created) == "Bank Name > Chase is created"
        assert render_entry(deleted) == "Bank Name > Chase is deleted"

    def test_document_entries(self) -> None:
        added = ChangeEntry(
            label_name="Passport Document",
            action_type=ActionType.CREATED,
            value="scan",
            slug=ChangeSlug.DOCUMENT,
        )
        removed = ChangeEntry(
            label_name="Passport Document",
            action_type=ActionType.DELETED,
            value="scan",
            slug=ChangeSlug.DOCUMENT,
        )
        replaced = ChangeEntry(
            label_name="Void Cheque Document",
            action_type=ActionType.UPDATED,
            reference_name="Chase",
            slug=ChangeSlug.DOCUMENT,
        )
        assert render_entry(added) == "scan Passport Document added"
        assert render_entry(removed) == "scan Passport Document deleted"
        assert render_entry(replaced) == "Chase > Void Cheque Document is updated"

    def test_display_value(self) -> None:
        assert display_value(None) == '" "'
        assert display_value(True) == "Yes"
        assert display_value(False) == "No"
        assert display_value(3) == "3"


def test_format_timestamp() -> None:
    value = datetime(2024, 3, 5, 14, 7, tzinfo=UTC)
    assert format_timestamp(value, "MM/DD/YYYY") == "03/05/2024 at 02:07 PM"
    assert format_timestamp(value.replace(tzinfo=None), "YYYY-MM-DD") == "2024-03-05 at 02:07 PM"


class TestAuditReaderList:
    async def test_renders_page(self) -> None:
        change_log = [
            {
                "label_name": "City",
                "old_value": "Austin",
                "new_value": "Dallas",
                "action_type": 2,
                "reference_name": "Jane",
            }
        ]
        repo = _repository([_row(change_log=change_log)], total=11)

        page = await _reader(repo).list("emp_1", page=2, page_size=5)

        repo.list_for_owner.assert_awaited_once_with(
            "emp_1", skip=5, limit=5, referrable_type_id=None, search=None
        )
        assert page.pagination.total == 11
        assert page.pagination.current_page == 2
        assert page.pagination.per_page == 5
        assert page.pagination.total_pages == 3
        item = page.data[0]
        assert item.action == "Edited"
        assert item.action_by == "John Admin"
        assert item.created_at == "03/05/2024 at 02:07 PM"
        assert item.change_log == ["Jane > City is updated from Austin to Dallas"]
        assert item.entries[0]["old_value"] == "Austin"

    async def test_defaults_and_clamping(self) -> None:
        repo = _repository([])
        reader = _reader(repo)

        await reader.list("emp_1")
        assert repo.list_for_owner.await_args.kwargs["limit"] == 10

        page = await reader.list("emp_1", page_size=500)
        assert page.pagination.per_page == 50

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"page_size": 0}])
    async def test_rejects_invalid_paging(self, kwargs: dict) -> None:
        with pytest.raises(ValidationException):
            await _reader(_repository([])).list("emp_1", **kwargs)

    async def test_search_is_trimmed(self) -> None:
        repo = _repository([])
        await _reader(repo).list("emp_1", search="  Passport ", referrable_type_id="pp_1")
        repo.count_for_owner.assert_awaited_once_with(
            "emp_1", referrable_type_id="pp_1", search="Passport"
        )

    async def test_referrable_label_lookup_is_cached(self) -> None:
        rows = [
            _row("a", referrable_type=int(ReferrableType.PASSPORT), referrable_type_id="pp_1"),
            _row("b", referrable_type=int(ReferrableType.PASSPORT), referrable_type_id="pp_1"),
        ]
        repo = _repository(rows)

        page = await _reader(repo).list("emp_1")

        assert [item.referrable_label for item in page.data] == ["X123", "X123"]
        repo.resolve_label.assert_awaited_once_with(
            "employee_passport_details", "document_number", "pp_1"
        )

    async def test_unknown_and_static_labels(self) -> None:
        rows = [
            _row("a", referrable_type=999, referrable_type_id="x"),
            _row("b", referrable_type=int(ReferrableType.VOID_CHEQUE_DOCUMENT), referrable_type_id="d1"),
            _row("c", referrable_type=None),
        ]
        repo = _repository(rows)

        page = await _reader(repo).list("emp_1")

        assert [item.referrable_label for item in page.data] == [
            "Unknown",
            "Void Cheque Document",
            None,
        ]
        repo.resolve_label.assert_not_awaited()

    async def test_failed_label_lookup_falls_back(self) -> None:
        repo = _repository([_row(referrable_type=int(ReferrableType.VISA), referrable_type_id="v1")])
        repo.resolve_label = AsyncMock(side_effect=OperationalError("select", {}, Exception("gone")))

        page = await _reader(repo).list("emp_1")

        assert page.data[0].referrable_label == "Unknown"

    async def test_malformed_entries_are_skipped(self) -> None:
        change_log = [
            {"label_name": "Broken"},
            {"label_name": "City", "value": "Austin", "action_type": 1},
        ]
        page = await _reader(_repository([_row(change_log=change_log)])).list("emp_1")
        assert page.data[0].change_log == ["City > Austin is created"]
