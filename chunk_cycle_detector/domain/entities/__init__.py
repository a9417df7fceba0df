"""Domain entities - Core business objects."""

from chunk_cycle_detector.domain.entities.bundle import (
    ChunkGraph,
    ModuleEdge,
    ModuleInfo,
    OutputChunk,
)
from chunk_cycle_detector.domain.entities.dependency_cycle import (
    DependencyCycle,
    DiagnosticEvent,
    Severity,
)

__all__ = [
    # Bundle entities
    "OutputChunk",
    "ModuleInfo",
    "ModuleEdge",
    "ChunkGraph",
    # DependencyCycle entity
    "DependencyCycle",
    "DiagnosticEvent",
    "Severity",
]
