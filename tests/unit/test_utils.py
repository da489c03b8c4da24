"""Tests for datetime helpers, request context and snapshot value rendering."""

from datetime import UTC, date, datetime, time, timedelta, timezone

from changetrack.application.services.snapshots import (
    bank_document_flags,
    dash,
    deposit_type_label,
    render_date,
    render_time,
    text_or_dash,
    yes_no,
)
from changetrack.shared.context import (
    clear_current_actor,
    get_current_actor_id,
    resolve_actor,
    set_current_actor,
)
from changetrack.shared.utils.datetime import ensure_utc, format_date, moment_to_strftime
from changetrack.shared.utils.generators import generate_cuid


class TestDatetime:
    def test_moment_patterns(self) -> None:
        assert moment_to_strftime("MM/DD/YYYY") == "%m/%d/%Y"
        assert moment_to_strftime("DD-MMM-YYYY") == "%d-%b-%Y"
        assert moment_to_strftime("YYYY.MM.DD") == "%Y.%m.%d"

    def test_format_date(self) -> None:
        assert format_date(date(2024, 1, 9), "DD/MM/YYYY") == "09/01/2024"
        assert format_date(None, "DD/MM/YYYY") == ""
        assert format_date(None, "DD/MM/YYYY", empty="-") == "-"

    def test_ensure_utc(self) -> None:
        assert ensure_utc(None) is None
        assert ensure_utc(datetime(2024, 1, 1)).tzinfo is UTC
        plus_two = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert ensure_utc(plus_two).hour == 10


class TestActorContext:
    def test_resolve_prefers_explicit(self) -> None:
        set_current_actor("emp_ctx")
        try:
            assert get_current_actor_id() == "emp_ctx"
            assert resolve_actor("emp_explicit") == "emp_explicit"
            assert resolve_actor(None) == "emp_ctx"
        finally:
            clear_current_actor()
        assert resolve_actor(None) is None


class TestRendering:
    def test_dash(self) -> None:
        assert dash(None) == "-"
        assert dash("") == "-"
        assert dash(0) == 0
        assert text_or_dash(5) == "5"

    def test_dates_and_times(self) -> None:
        assert render_date(None, "MM/DD/YYYY") == ""
        assert render_date(date(2024, 2, 3), "MM/DD/YYYY") == "02/03/2024"
        assert render_time(time(8, 5, 59)) == "08:05"
        assert render_time(None) == "-"

    def test_labels(self) -> None:
        assert deposit_type_label(3) == "Partial %"
        assert deposit_type_label(9) == "-"
        assert deposit_type_label(None) == "-"
        assert yes_no(False) == "No"
        assert yes_no(None) == "-"

    def test_bank_document_flags(self) -> None:
        info = [{"id": 5, "deposit_form_documents": [{"new_document_id": "d1"}]}]
        assert bank_document_flags(info, "5") == {
            "void_cheque_document_modified": False,
            "deposit_form_document_modified": True,
        }
        assert bank_document_flags(None, "5") == {
            "void_cheque_document_modified": False,
            "deposit_form_document_modified": False,
        }


def test_generate_cuid_is_unique() -> None:
    assert generate_cuid() != generate_cuid()
