"""Configuration classes for pgraph components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EnumeratorConfig:
    """Configuration for path enumeration."""

    # Longest path (in node occurrences) the walk may build; None is unbounded
    max_depth: Optional[int] = None

    # Total node visits allowed for one enumeration; None is unbounded
    max_visits: Optional[int] = None

    def validate(self) -> None:
        """Raise ValueError when a field holds an unusable value."""
        for field_name in ("max_depth", "max_visits"):
            value = getattr(self, field_name)
            if value is not None and (not isinstance(value, int) or value < 1):
                raise ValueError(f"{field_name} must be a positive integer or None")


# Global configuration instance
ENUMERATOR_CONFIG = EnumeratorConfig()
