"""Domain entity — header-only person profile. All other data lives in records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class PersonProfile:
    """A person the vault holds records for; partition key for their records."""

    id: str
    first_name: str
    last_name: str = ""
    preferred_name: str | None = None
    relationship: str = "Other"
    dob: str | None = None
    avatar_uri: str | None = None
    is_primary: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        first = self.preferred_name or self.first_name
        return f"{first} {self.last_name}".strip()
