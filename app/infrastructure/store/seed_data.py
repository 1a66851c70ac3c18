from __future__ import annotations

from typing import Any

SERVICES: list[dict[str, Any]] = [
    {"id": "svc_beard", "name": "Beard Trim", "price": "35.00", "duration": 20, "is_active": True},
    {"id": "svc_haircut", "name": "Haircut", "price": "50.00", "duration": 30, "is_active": True},
    {"id": "svc_combo", "name": "Haircut + Beard", "price": "75.00", "duration": 50, "is_active": True},
    {"id": "svc_hot_towel", "name": "Hot Towel Shave", "price": "60.00", "duration": 40, "is_active": True},
    {"id": "svc_kids", "name": "Kids Haircut", "price": "40.00", "duration": 25, "is_active": False},
]

BARBERS: list[dict[str, Any]] = [
    {"id": "brb_carlos", "name": "Carlos Mendes", "specialty": "Fades and classic cuts", "avatar_url": None, "is_active": True},
    {"id": "brb_andre", "name": "André Lima", "specialty": None, "avatar_url": None, "is_active": True},
    {"id": "brb_rafa", "name": "Rafael Souza", "specialty": "Beard design", "avatar_url": "", "is_active": True},
    {"id": "brb_old", "name": "Former Barber", "specialty": None, "avatar_url": None, "is_active": False},
]
