"""DependencyCycle entity module.

This module defines the DependencyCycle entity representing one detected
simple cycle in a directed dependency graph.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Severity of a diagnostic event."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class DiagnosticEvent:
    """A structured report line produced for detected cycles.

    Presentation (colour, formatting) is left to whoever consumes the event.

    Attributes:
        severity: How loudly the event should be presented
        message: Human-readable text
    """

    severity: Severity
    message: str


@dataclass
class DependencyCycle:
    """Represents a detected simple cycle.

    Domain invariants:
    - path is closed (first node == last node)
    - path has at least 3 entries (two distinct nodes plus the closing node)
    - interior nodes are pairwise distinct

    Attributes:
        path: Closed sequence of node identifiers
    """

    path: list[Hashable] = field(default_factory=list)

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if len(self.path) < 3:
            raise ValueError(
                f"Cycle path must contain at least 3 entries, "
                f"got: {len(self.path)}"
            )

        if self.path[0] != self.path[-1]:
            raise ValueError(
                f"Cycle path must start and end on the same node, "
                f"got: {self.path[0]!r} and {self.path[-1]!r}"
            )

        interior = self.path[:-1]
        if len(set(interior)) != len(interior):
            raise ValueError(
                f"Cycle path must not repeat interior nodes, got: {self.path}"
            )

    def hops(self) -> list[tuple[Hashable, Hashable]]:
        """Consecutive (from, to) edges walked by the cycle."""
        return list(zip(self.path, self.path[1:]))

    def format(self, separator: str = " → ") -> str:
        """Render the path as a single line.

        Args:
            separator: Text placed between consecutive nodes

        Returns:
            The joined path, e.g. ``"a → b → a"``
        """
        return separator.join(str(node) for node in self.path)
