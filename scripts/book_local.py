#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/book_local.py

What it does:
- Loads the catalog from the configured record store (in-memory by default)
- Walks the booking wizard step by step; type "b" at any prompt to go back
- Submits the booking and prints the agenda summary of the booked day
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.appointment_lifecycle import AppointmentLifecycleManager
from app.application.use_cases.booking_steps import BookingStep
from app.application.use_cases.booking_wizard import BookingSession
from app.application.use_cases.catalog import CatalogLoader
from app.application.use_cases.daily_summary import summarize
from app.application.use_cases.reserve_appointment import ReservationCommitter
from app.core.config import settings
from app.domain.entities.role import Role, StaffContext
from app.infrastructure.store.memory_store import MemoryRecordStore

BACK = "b"


def _ask(prompt: str) -> str:
    return input(f"{prompt}: ").strip()


def _print_errors(session: BookingSession) -> None:
    for error in session.wizard.errors.values():
        print(f"  ! {error.field}: {error.message}")


def _choose(label: str, options: list[str]) -> int | str | None:
    for index, option in enumerate(options, 1):
        print(f"  {index}. {option}")
    raw = _ask(label)
    if raw == BACK:
        return BACK
    if raw.isdigit() and 1 <= int(raw) <= len(options):
        return int(raw) - 1
    return None


async def _run_step(session: BookingSession, loader: CatalogLoader) -> bool:
    """Returns False once the session is finished."""
    wizard = session.wizard
    step = wizard.step
    print(f"\n[{step.value}/5] {step.name.title()}")

    if step == BookingStep.SERVICE:
        services = loader.snapshot.services
        picked = _choose("Service #", [f"{s.name} - {s.price:.2f} ({s.duration} min)" for s in services])
        if isinstance(picked, int):
            wizard.select_service(services[picked])

    elif step == BookingStep.PROVIDER:
        providers = loader.snapshot.providers
        picked = _choose("Barber #", [f"{p.name} - {p.specialty}" for p in providers])
        if picked == BACK:
            wizard.back()
            return True
        if isinstance(picked, int):
            wizard.select_provider(providers[picked])

    elif step == BookingStep.DATETIME:
        raw_date = _ask("Date (YYYY-MM-DD)")
        if raw_date == BACK:
            wizard.back()
            return True
        try:
            wizard.select_date(date.fromisoformat(raw_date))
        except ValueError:
            print("  ! date: use YYYY-MM-DD")
        wizard.select_time(_ask("Time (HH:MM)"))

    elif step == BookingStep.CUSTOMER:
        name = _ask("Full name")
        if name == BACK:
            wizard.back()
            return True
        wizard.update_name(name)
        print(f"  phone: {wizard.update_phone(_ask('Phone / WhatsApp'))}")
        wizard.update_email(_ask("Email (optional)"))

    else:
        for line in wizard.draft.describe():
            print(f"  {line}")
        answer = _ask("Confirm booking? [y/b]").lower()
        if answer == BACK:
            wizard.back()
            return True
        if answer != "y":
            return True
        result = await session.submit()
        print(f"\n{result.notice.title} {result.notice.description}")
        return not result.ok

    if not wizard.next():
        _print_errors(session)
    return True


async def main() -> None:
    store = MemoryRecordStore(unique_slots=settings.UNIQUE_SLOTS)
    loader = CatalogLoader(store=store, default_specialty=settings.DEFAULT_PROVIDER_SPECIALTY)
    snapshot = await loader.refresh()
    if snapshot.state != "ready":
        print(f"Catalog unavailable: {snapshot.error}")
        return
    if snapshot.is_empty:
        print("No services available at the moment.")
        return

    session = BookingSession(committer=ReservationCommitter(store=store))
    print("\nLocal Booking Harness")
    print("-" * 60)
    while await _run_step(session, loader):
        pass

    appointment = session.appointment
    if appointment is None:
        return
    manager = AppointmentLifecycleManager(store=store, context=StaffContext(role=Role.staff))
    day = await manager.load_for_date(appointment.date)
    print(f"\nAgenda for {appointment.date.isoformat()}: {summarize(day).as_dict()}")
    for item in day:
        print(f"  {item.time} {item.customer_name} - {item.service_label} ({item.status.value})")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print()
