"""Domain entity — an address-book contact referenced from record payloads."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ContactCategory(str, Enum):
    MEDICAL = "Medical"
    SERVICE_PROVIDER = "Service Provider"
    EMERGENCY = "Emergency"
    FAMILY = "Family"
    SCHOOL = "School"
    WORK = "Work"
    INSURANCE = "Insurance"
    LEGAL = "Legal"
    OTHER = "Other"


@dataclass(frozen=True)
class LinkedProfile:
    """A person/pet profile this contact is associated with."""

    id: str
    name: str
    type: str  # "user" | "dependent"
    role: str | None = None


@dataclass
class Contact:
    id: str
    first_name: str
    last_name: str
    phone: str = ""
    email: str | None = None
    photo: str | None = None
    categories: list[ContactCategory] = field(default_factory=lambda: [ContactCategory.OTHER])
    relationship: str | None = None
    linked_profiles: list[LinkedProfile] = field(default_factory=list)
    is_favorite: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
