"""Tests for add-on selections, roles, invitations, activity events and step results."""

from datetime import datetime, timedelta, timezone

import pytest

from agencyhub.domain.entities.activity import ActivityEvent, ActivityType
from agencyhub.domain.entities.addon import AddonKey, parse_addon_selection
from agencyhub.domain.entities.invitation import Invitation, InvitationStatus
from agencyhub.domain.entities.membership import MemberRole
from agencyhub.domain.exceptions import ValidationError
from agencyhub.domain.workflow import StepResult, StepStatus


class TestParseAddonSelection:

    def test_valid_selection_keeps_order(self):
        selection = parse_addon_selection({"extraStorageGB": 2, "extraAiCredits": 0})
        assert list(selection.items()) == [("extraStorageGB", 2), ("extraAiCredits", 0)]

    def test_unknown_key_rejected_by_default(self):
        with pytest.raises(ValidationError, match="Unknown add-on: extraDomains"):
            parse_addon_selection({"extraDomains": 1})

    def test_unknown_key_dropped_when_lenient(self):
        assert parse_addon_selection({"extraDomains": 1, "extraSubClients": 1}, reject_unknown=False) == {
            "extraSubClients": 1,
        }

    @pytest.mark.parametrize("quantity", [-1, 1.5, "2", True, None])
    def test_invalid_quantities(self, quantity):
        with pytest.raises(ValidationError):
            parse_addon_selection({"extraSubClients": quantity})

    def test_non_mapping_payload(self):
        with pytest.raises(ValidationError):
            parse_addon_selection([("extraSubClients", 1)])

    def test_addon_key_parse(self):
        assert AddonKey.parse("extraAiCredits") is AddonKey.EXTRA_AI_CREDITS
        assert AddonKey.parse("extraaicredits") is None


class TestMemberRole:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Agency_Admin", MemberRole.AGENCY_ADMIN),
            (" agency_owner ", MemberRole.AGENCY_OWNER),
            ("SuperAdmin", MemberRole.SUPER_ADMIN),
            ("super_admin", MemberRole.SUPER_ADMIN),
            ("CLIENT", MemberRole.CLIENT),
            ("wizard", MemberRole.UNKNOWN),
            ("", MemberRole.UNKNOWN),
            (None, MemberRole.UNKNOWN),
        ],
    )
    def test_from_external(self, raw, expected):
        assert MemberRole.from_external(raw) is expected


class TestInvitation:

    def test_issue_sets_expiry_from_ttl(self):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        invitation = Invitation.issue(
            invitation_id="",
            tenant_id="client-1",
            email="ana@example.com",
            name="Ana",
            role=MemberRole.CLIENT,
            invited_by="user-owner",
            token="tok",
            ttl=timedelta(days=7),
            now=now,
        )

        assert invitation.status == InvitationStatus.PENDING
        assert invitation.expires_at == now + timedelta(days=7)
        assert invitation.is_pending(now + timedelta(days=6)) is True
        assert invitation.is_pending(now + timedelta(days=7)) is False
        assert invitation.is_expired(now + timedelta(days=8)) is True


class TestActivityEvent:

    def test_dict_round_trip(self):
        event = ActivityEvent(
            agency_tenant_id="agency-1",
            type=ActivityType.CLIENT_CREATED,
            subject_tenant_id="client-1",
            actor_id="user-owner",
            payload={"clientName": "Café Müller"},
        )

        data = event.to_dict()
        assert data["type"] == "client_created"
        assert data["createdBy"] == "user-owner"
        assert ActivityEvent.from_dict(data) == event

    def test_payload_is_read_only(self):
        source = {"addons": {"extraSubClients": 1}}
        event = ActivityEvent(
            agency_tenant_id="agency-1",
            type=ActivityType.ADDONS_UPDATED,
            subject_tenant_id="agency-1",
            actor_id="user-owner",
            payload=source,
        )

        source["addons"] = {}
        assert event.payload["addons"] == {"extraSubClients": 1}
        with pytest.raises(TypeError):
            event.payload["addons"] = {}


class TestStepResult:

    def test_completed_carries_value(self):
        result = StepResult.completed("project_seeded", "project-1")
        assert result.ok is True
        assert result.value == "project-1"
        assert result.to_dict() == {"step": "project_seeded", "status": "completed"}

    def test_failed_defaults_to_continue(self):
        result = StepResult.failed("billing_flagged", "Failed to setup billing")
        assert result.status is StepStatus.FAILED_CONTINUE
        assert result.to_dict()["error"] == "Failed to setup billing"

    def test_failed_abort_and_skipped(self):
        assert StepResult.failed("tenant_created", "boom", abort=True).status is StepStatus.FAILED_ABORT
        assert StepResult.skipped("invitations_sent").ok is False
