from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from app.domain.entities.customer import Customer
from app.domain.entities.provider import Provider
from app.domain.entities.service import Service


@dataclass(frozen=True)
class BookingDraft:
    service: Service | None = None
    provider: Provider | None = None
    date: date | None = None
    time: str | None = None  # HH:MM
    customer: Customer = field(default_factory=Customer)

    @property
    def total_price(self) -> Decimal:
        return self.service.price if self.service else Decimal("0")

    def with_service(self, service: Service) -> "BookingDraft":
        return replace(self, service=service)

    def with_provider(self, provider: Provider) -> "BookingDraft":
        return replace(self, provider=provider)

    def with_date(self, day: date) -> "BookingDraft":
        return replace(self, date=day)

    def with_time(self, time: str) -> "BookingDraft":
        return replace(self, time=time)

    def with_customer(self, **changes: str) -> "BookingDraft":
        return replace(self, customer=replace(self.customer, **changes))

    def describe(self) -> list[str]:
        """Summary lines shown on the confirmation step."""
        lines: list[str] = []
        if self.service:
            lines.append(f"Service: {self.service.name} ({self.service.duration} min)")
        if self.provider:
            lines.append(f"Barber: {self.provider.name} - {self.provider.specialty}")
        if self.date:
            lines.append(f"Date: {self.date.strftime('%A, %d %B %Y')}")
        if self.time:
            lines.append(f"Time: {self.time}")
        if self.customer.name:
            lines.append(f"Customer: {self.customer.name}")
        if self.customer.phone:
            lines.append(f"Phone: {self.customer.phone}")
        if self.customer.email:
            lines.append(f"Email: {self.customer.email}")
        lines.append(f"Total: {self.total_price:.2f}")
        return lines
