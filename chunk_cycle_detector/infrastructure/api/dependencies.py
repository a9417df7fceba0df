"""
Dependency injection for FastAPI routes.

Provides factory functions for creating use cases with their required dependencies.
Uses FastAPI's Depends() for dependency injection.
"""

from fastapi import Depends

from chunk_cycle_detector.application.use_cases.detect_chunk_cycles import (
    DetectChunkCyclesUseCase,
)
from chunk_cycle_detector.application.use_cases.detect_graph_cycles import (
    DetectGraphCyclesUseCase,
)
from chunk_cycle_detector.domain.services.chunk_graph_builder import (
    ChunkGraphBuilder,
)
from chunk_cycle_detector.domain.services.circular_dependency_detector import (
    CircularDependencyDetector,
)
from chunk_cycle_detector.infrastructure.config import Settings, get_settings


# Domain service factories


def get_circular_dependency_detector() -> CircularDependencyDetector:
    """Get CircularDependencyDetector instance."""
    return CircularDependencyDetector()


def get_chunk_graph_builder() -> ChunkGraphBuilder:
    """Get ChunkGraphBuilder instance."""
    return ChunkGraphBuilder()


# Use case factories


def get_detect_graph_cycles_use_case(
    detector: CircularDependencyDetector = Depends(get_circular_dependency_detector),
) -> DetectGraphCyclesUseCase:
    """Get DetectGraphCyclesUseCase instance."""
    return DetectGraphCyclesUseCase(detector=detector)


def get_detect_chunk_cycles_use_case(
    detector: CircularDependencyDetector = Depends(get_circular_dependency_detector),
    graph_builder: ChunkGraphBuilder = Depends(get_chunk_graph_builder),
    settings: Settings = Depends(get_settings),
) -> DetectChunkCyclesUseCase:
    """Get DetectChunkCyclesUseCase instance with policy defaults from settings."""
    return DetectChunkCyclesUseCase(
        detector=detector,
        graph_builder=graph_builder,
        throw_on_cycle=settings.detection.throw_on_cycle,
        show_module_detail=settings.detection.show_module_detail,
    )
