"""Value object describing whether the vault syncs with a remote API."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DataMode:
    """Injected into stores instead of a process-wide local-only flag."""

    local_only: bool = True
    graphql_url: str | None = None

    @property
    def is_networked(self) -> bool:
        return not self.local_only and bool(self.graphql_url)
