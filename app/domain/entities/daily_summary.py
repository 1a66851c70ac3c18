from dataclasses import dataclass


@dataclass(frozen=True)
class DailySummary:
    pending: int = 0
    confirmed: int = 0
    total: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"pending": self.pending, "confirmed": self.confirmed, "total": self.total}
