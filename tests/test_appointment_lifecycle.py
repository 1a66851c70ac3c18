"""
Tests for loading a day's agenda and confirming or cancelling appointments.
"""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from app.application.exceptions import AccessDenied, AgendaUnavailable, TransitionError
from app.application.use_cases.appointment_lifecycle import AppointmentLifecycleManager
from app.domain.entities.appointment import AppointmentStatus
from app.domain.entities.role import Role, StaffContext

DAY = date(2025, 3, 10)
STAFF = StaffContext(role=Role.staff, user_id="u1")


@pytest.fixture
def agenda_store(make_store, make_row):
    return make_store(
        appointments=[
            make_row("a3", "16:00:00"),
            make_row("a1", "09:30:00", status="confirmed"),
            make_row("a2", "11:00:00"),
            make_row("other-day", "10:00:00", day="2025-03-11"),
        ]
    )


def test_load_for_date_filters_and_orders_by_time(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)

    appointments = asyncio.run(manager.load_for_date(DAY))

    assert [a.id for a in appointments] == ["a1", "a2", "a3"]
    assert [a.time for a in appointments] == ["09:30", "11:00", "16:00"]
    assert appointments[0].service_name == "Haircut"
    assert appointments[0].provider_name == "Bruno"
    assert manager.day == DAY


def test_missing_joined_service_uses_fallback_labels(make_store, make_row):
    row = make_row("a1", "10:00")
    row["service_id"] = "gone"
    manager = AppointmentLifecycleManager(make_store(appointments=[row]), STAFF)

    [appointment] = asyncio.run(manager.load_for_date(DAY))

    assert appointment.service_name is None
    assert appointment.service_label == "Service not specified"
    assert appointment.duration_label == 30


def test_rows_seeded_with_date_objects_are_found(make_store, make_row):
    row = make_row("a1", "10:00")
    row["appointment_date"] = DAY
    manager = AppointmentLifecycleManager(make_store(appointments=[row]), STAFF)

    appointments = asyncio.run(manager.load_for_date(DAY))

    assert [a.id for a in appointments] == ["a1"]
    assert appointments[0].date == DAY


def test_confirm_patches_projection_without_reload(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    asyncio.run(manager.load_for_date(DAY))
    agenda_store.calls.clear()

    updated = asyncio.run(manager.transition("a2", "confirmed"))

    assert updated.status == AppointmentStatus.confirmed
    assert agenda_store.calls == ["update_appointment_status"]
    statuses = {a.id: a.status for a in manager.appointments}
    assert statuses == {
        "a1": AppointmentStatus.confirmed,
        "a2": AppointmentStatus.confirmed,
        "a3": AppointmentStatus.pending,
    }


def test_cancel_keeps_appointment_in_store(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    asyncio.run(manager.load_for_date(DAY))

    asyncio.run(manager.transition("a3", AppointmentStatus.cancelled))

    reloaded = asyncio.run(manager.load_for_date(DAY))
    assert len(reloaded) == 3
    assert reloaded[-1].status == AppointmentStatus.cancelled


def test_transition_is_a_blind_overwrite_by_default(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    asyncio.run(manager.load_for_date(DAY))

    updated = asyncio.run(manager.transition("a1", "cancelled"))

    assert updated.status == AppointmentStatus.cancelled


def test_strict_mode_only_moves_pending_appointments(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF, strict=True)
    asyncio.run(manager.load_for_date(DAY))

    with pytest.raises(TransitionError) as exc_info:
        asyncio.run(manager.transition("a1", "cancelled"))

    assert exc_info.value.reason == "conflict"
    assert manager.appointments[0].status == AppointmentStatus.confirmed
    assert asyncio.run(manager.transition("a2", "confirmed")).status == AppointmentStatus.confirmed


def test_store_failure_leaves_projection_unchanged(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    before = asyncio.run(manager.load_for_date(DAY))
    agenda_store.fail_on.add("update_appointment_status")

    with pytest.raises(TransitionError) as exc_info:
        asyncio.run(manager.transition("a2", "confirmed"))

    assert exc_info.value.reason == "store_error"
    assert manager.appointments == before


def test_unknown_appointment_raises_not_found(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)

    with pytest.raises(TransitionError) as exc_info:
        asyncio.run(manager.transition("missing", "confirmed"))
    assert exc_info.value.reason == "not_found"


def test_transition_outside_loaded_day_returns_store_row(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    asyncio.run(manager.load_for_date(DAY))

    updated = asyncio.run(manager.transition("other-day", "confirmed"))

    assert updated.id == "other-day"
    assert updated.status == AppointmentStatus.confirmed
    assert all(a.id != "other-day" for a in manager.appointments)


def test_only_confirm_and_cancel_are_accepted(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)

    for target in ("completed", "pending", "archived"):
        with pytest.raises(ValueError):
            asyncio.run(manager.transition("a2", target))
    assert agenda_store.calls == []


def test_load_failure_keeps_prior_projection(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, STAFF)
    before = asyncio.run(manager.load_for_date(DAY))
    agenda_store.fail_on.add("select_appointments")

    with pytest.raises(AgendaUnavailable):
        asyncio.run(manager.load_for_date(date(2025, 3, 11)))
    assert manager.appointments == before
    assert manager.day == DAY


def test_role_none_cannot_manage_agenda(agenda_store):
    with pytest.raises(AccessDenied):
        AppointmentLifecycleManager(agenda_store, StaffContext(role=Role.none))


def test_owner_is_as_authorized_as_staff(agenda_store):
    manager = AppointmentLifecycleManager(agenda_store, StaffContext(role=Role.owner))
    assert asyncio.run(manager.transition("a2", "confirmed")).status == AppointmentStatus.confirmed
