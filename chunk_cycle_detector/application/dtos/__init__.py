"""Application layer DTOs.

This package contains data transfer objects (DTOs) for the application layer.
Uses dataclasses (not Pydantic) per Clean Architecture principles.
"""

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    ChunkCycleDTO,
    ChunkDTO,
    CycleHopDTO,
    DetectChunkCyclesRequest,
    DetectChunkCyclesResponse,
    DetectGraphCyclesRequest,
    DetectGraphCyclesResponse,
    DiagnosticDTO,
    ModuleDTO,
    ModuleEdgeDTO,
)

__all__ = [
    # Raw graph
    "DetectGraphCyclesRequest",
    "DetectGraphCyclesResponse",
    # Bundle
    "ChunkDTO",
    "ModuleDTO",
    "DetectChunkCyclesRequest",
    "ModuleEdgeDTO",
    "CycleHopDTO",
    "ChunkCycleDTO",
    "DiagnosticDTO",
    "DetectChunkCyclesResponse",
]
