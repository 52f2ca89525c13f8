"""Domain entity — header-only pet profile (identity + avatar)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class PetProfile:
    """A pet the vault holds records for; partition key for its records."""

    id: str
    pet_name: str
    kind: str = "Other"
    kind_other_text: str | None = None
    breed: str | None = None
    breed_other_text: str | None = None
    dob: str | None = None
    gender: str | None = None
    avatar_uri: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
