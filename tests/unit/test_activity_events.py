"""Tests for building and publishing activity signals."""

import logging
from unittest.mock import MagicMock

import pytest

from changetrack.application.dtos.change_log import Snapshot
from changetrack.application.services.activity_events import entity_signal, publish_activity
from changetrack.domain.enums import ActionType, EntityKind, ReferrableType, Signal
from changetrack.shared.context import clear_current_actor, set_current_actor


class TestEntitySignal:
    def test_defaults_from_kind(self) -> None:
        payload = entity_signal(
            EntityKind.PASSPORT, ActionType.UPDATED, "emp_1", entity_id="pp_1", actor_id="emp_2"
        )
        assert payload.activity_path == "User Profile > Documents > Work Authorization > Passport"
        assert payload.referrable_type == int(ReferrableType.PASSPORT)
        assert payload.referrable_type_id == "pp_1"
        assert payload.condition == {"id": "pp_1"}
        assert payload.actor_id == "emp_2"

    def test_collection_condition_is_owner(self) -> None:
        payload = entity_signal(EntityKind.BANK_ACCOUNT, ActionType.UPDATED, "emp_1", before=[])
        assert payload.condition == {"employee_id": "emp_1"}
        assert payload.before_snapshot == []

    def test_actor_defaults_to_request_actor(self) -> None:
        set_current_actor("emp_ctx")
        try:
            payload = entity_signal(EntityKind.SKILL, ActionType.DELETED, "emp_1", entity_id="sk_1")
        finally:
            clear_current_actor()
        assert payload.actor_id == "emp_ctx"

    def test_explicit_path_and_flags(self) -> None:
        before = Snapshot(fields={"Name": "a"})
        payload = entity_signal(
            EntityKind.SKILL,
            ActionType.UPDATED,
            "emp_1",
            entity_id="sk_1",
            before=before,
            flags={"document": True},
            activity_path="User Profile > Skills > Certifications",
        )
        assert payload.activity_path == "User Profile > Skills > Certifications"
        assert payload.flags == {"document": True}


class TestPublishActivity:
    def test_publishes_on_matching_signal(self) -> None:
        publisher = MagicMock()
        publisher.publish.return_value = True
        payload = entity_signal(EntityKind.SKILL, ActionType.CREATED, "emp_1", entity_id="sk_1")

        assert publish_activity(publisher, payload) is True
        publisher.publish.assert_called_once_with(Signal.ENTITY_CREATED, payload)

    def test_without_publisher(self, caplog: pytest.LogCaptureFixture) -> None:
        payload = entity_signal(EntityKind.SKILL, ActionType.CREATED, "emp_1", entity_id="sk_1")
        with caplog.at_level(logging.WARNING):
            assert publish_activity(None, payload) is False
        assert "No dispatcher configured" in caplog.text
