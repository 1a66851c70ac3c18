from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    name: str = ""
    phone: str = ""  # masked, e.g. "(11) 98765-4321"
    email: str = ""
