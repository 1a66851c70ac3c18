from dataclasses import dataclass


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: str = "default"  # "default" | "destructive"
