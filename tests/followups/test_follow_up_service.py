from __future__ import annotations

from datetime import date
from urllib.parse import unquote

import pytest

from congregation_attendance.core.enums import FollowUpStatus
from congregation_attendance.core.exceptions import ValidationError
from congregation_attendance.followups.escalation import compose_escalation, format_period, round_percent

PERIOD = "2026-02"
SERVICE_DAYS = (1, 4, 8, 11, 15, 18, 22, 25)


def _present(container, member_id: str, days):
    for day in days:
        container.register_service.set_attendance(member_id, date(2026, 2, day), "central", "PRESENT")


def test_board_keeps_only_members_at_the_floor(container):
    # m1: 2 absences, m2: 3 absences, m3: 8 absences
    _present(container, "m1", SERVICE_DAYS[:6])
    _present(container, "m2", SERVICE_DAYS[:5])

    board = container.follow_up_service.build_board("central", PERIOD)

    assert [e.frequency.member.member_id for e in board.active] == ["m3", "m2"]
    assert all(e.status == FollowUpStatus.PENDING for e in board.active)
    assert board.resolved == []


def test_done_moves_member_to_resolved(container, follow_ups_repo):
    container.follow_up_service.set_status("m3", PERIOD, "DONE")

    board = container.follow_up_service.build_board("central", PERIOD)

    assert [e.frequency.member.member_id for e in board.resolved] == ["m3"]
    assert board.resolved[0].last_update is not None
    assert "m3" not in {e.frequency.member.member_id for e in board.active}


def test_any_transition_allowed_and_one_live_record(container, follow_ups_repo):
    svc = container.follow_up_service
    for status in ("SCHEDULED", "DONE", "PENDING", "DONE", "SCHEDULED"):
        svc.set_status("m1", PERIOD, status)

    assert len(follow_ups_repo.list_follow_ups(member_id="m1", period=PERIOD)) == 1
    assert svc.status_for("m1", PERIOD) == FollowUpStatus.SCHEDULED


def test_status_defaults_to_pending(container):
    assert container.follow_up_service.status_for("m2", PERIOD) == FollowUpStatus.PENDING


def test_status_is_kept_per_period(container):
    container.follow_up_service.set_status("m1", "2026-01", "DONE")

    assert container.follow_up_service.status_for("m1", PERIOD) == FollowUpStatus.PENDING


def test_set_status_needs_no_eligibility(container, follow_ups_repo):
    _present(container, "m1", SERVICE_DAYS)

    container.follow_up_service.set_status("m1", PERIOD, FollowUpStatus.SCHEDULED)

    assert follow_ups_repo.list_follow_ups(member_id="m1")[0].status == FollowUpStatus.SCHEDULED


def test_eligibility_is_recomputed(container):
    container.follow_up_service.set_status("m1", PERIOD, "SCHEDULED")
    assert "m1" in {e.frequency.member.member_id for e in container.follow_up_service.build_board("central", PERIOD).active}

    _present(container, "m1", SERVICE_DAYS)

    board = container.follow_up_service.build_board("central", PERIOD)
    assert "m1" not in {e.frequency.member.member_id for e in board.active + board.resolved}


def test_unknown_status_rejected(container):
    with pytest.raises(ValidationError):
        container.follow_up_service.set_status("m1", PERIOD, "CANCELLED")


def test_entry_for_member_outside_unit(container):
    with pytest.raises(ValidationError):
        container.follow_up_service.entry_for("central", "m5", PERIOD)


def test_escalation_message(container):
    _present(container, "m2", (1, 4))
    container.register_service.set_attendance("m2", date(2026, 2, 8), "central", "JUSTIFIED", "sick")
    container.follow_up_service.set_status("m2", PERIOD, "SCHEDULED")

    entry = container.follow_up_service.entry_for("central", "m2", PERIOD)
    message = compose_escalation(container.units_repo.get_by_id("central"), entry, PERIOD)

    assert "Bruno" in message.text
    assert "Unit: Central" in message.text
    assert "February/2026" in message.text
    assert "Presences 2, Absences 5, Justified 1" in message.text
    assert "Attendance 25%" in message.text
    assert "CRITICAL ATTENDANCE" in message.text
    assert "Status: SCHEDULED" in message.text
    assert message.url.startswith("https://wa.me/5511999990000?text=")
    assert unquote(message.url.split("?text=", 1)[1]) == message.text


def test_format_period():
    assert format_period("2025-12") == "December/2025"


def test_escalation_rounds_half_percent_up(container):
    # 1 of 8 services is 12.5%
    _present(container, "m3", (1,))

    entry = container.follow_up_service.entry_for("central", "m3", PERIOD)
    message = compose_escalation(container.units_repo.get_by_id("central"), entry, PERIOD)

    assert entry.frequency.stats.percent == 12.5
    assert "Attendance 13%" in message.text


@pytest.mark.parametrize("value,expected", [(12.5, 13), (37.5, 38), (62.5, 63), (33.333, 33), (0.0, 0), (100.0, 100)])
def test_round_percent(value, expected):
    assert round_percent(value) == expected
