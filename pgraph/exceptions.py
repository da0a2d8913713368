"""Error taxonomy for graph construction and traversal.

Build errors abort graph construction and never leave a partial graph behind.
Dead loops found during traversal are not errors; see
:class:`pgraph.traversal.DeadLoopWarning`.
"""

from __future__ import annotations

from typing import Any


class BuildError(ValueError):
    """Base class for errors raised while building a graph."""


class DuplicateNodeError(BuildError):
    """A node name is declared more than once."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}: Multiple nodes with the same name in graph.")


class InvalidNodeNameError(BuildError):
    """A node name is not a non-empty string."""

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"{name!r}: Node names must be non-empty strings.")


class UnresolvedReferenceError(BuildError):
    """An edge points at a node name that is not declared."""

    def __init__(self, source: str, target: Any) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"{target}: Failed to find definition for node referenced by '{source}'."
        )


class MissingEntryError(BuildError):
    """The entry node is not declared."""

    def __init__(self, entry: str) -> None:
        self.entry = entry
        super().__init__(f"Failed to find entry node '{entry}' in graph.")


class TraversalLimitError(RuntimeError):
    """A configured enumeration budget was exhausted."""

    def __init__(self, limit: str, value: int) -> None:
        self.limit = limit
        self.value = value
        super().__init__(f"Path enumeration exceeded {limit}={value}.")
