from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RATING = 5.0


@dataclass(frozen=True)
class Provider:
    id: str
    name: str
    specialty: str
    avatar_url: str | None = None
    rating: float = DEFAULT_RATING
