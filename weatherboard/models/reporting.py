"""Reporting models."""

from dataclasses import dataclass, field


@dataclass
class RefreshSummary:
    requested: int = 0
    refreshed: int = 0
    failed: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failed
