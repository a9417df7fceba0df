"""Domain services - Business logic that doesn't fit in entities."""

from chunk_cycle_detector.domain.services.chunk_graph_builder import (
    ChunkGraphBuilder,
)
from chunk_cycle_detector.domain.services.circular_dependency_detector import (
    CircularDependencyDetector,
    CycleDetectionResult,
    detect_cycles,
)
from chunk_cycle_detector.domain.services.cycle_extractor import CycleExtractor
from chunk_cycle_detector.domain.services.topological_reducer import (
    ReductionResult,
    TopologicalReducer,
)

__all__ = [
    "TopologicalReducer",
    "ReductionResult",
    "CycleExtractor",
    "CircularDependencyDetector",
    "CycleDetectionResult",
    "detect_cycles",
    "ChunkGraphBuilder",
]
