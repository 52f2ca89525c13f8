"""Domain entity — a household grouping people and pets."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Household:
    id: str
    name: str
    address: str | None = None
    member_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
