"""Use cases - Application-specific business rules.

This package contains use cases that orchestrate domain logic
and implement application-specific workflows.
"""

from chunk_cycle_detector.application.use_cases.detect_chunk_cycles import (
    CircularChunkDependencyError,
    DetectChunkCyclesUseCase,
)
from chunk_cycle_detector.application.use_cases.detect_graph_cycles import (
    DetectGraphCyclesUseCase,
)

__all__ = [
    "DetectGraphCyclesUseCase",
    "DetectChunkCyclesUseCase",
    "CircularChunkDependencyError",
]
