"""Detect chunk cycles use case.

This module implements the use case for detecting circular dependencies
between the output chunks of a bundle and reporting them.
"""

import logging

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    ChunkCycleDTO,
    CycleHopDTO,
    DetectChunkCyclesRequest,
    DetectChunkCyclesResponse,
    DiagnosticDTO,
    ModuleEdgeDTO,
)
from chunk_cycle_detector.domain.entities.bundle import (
    ChunkGraph,
    ModuleInfo,
    OutputChunk,
)
from chunk_cycle_detector.domain.entities.dependency_cycle import (
    DependencyCycle,
    DiagnosticEvent,
    Severity,
)
from chunk_cycle_detector.domain.services.chunk_graph_builder import (
    ChunkGraphBuilder,
)
from chunk_cycle_detector.domain.services.circular_dependency_detector import (
    CircularDependencyDetector,
)

logger = logging.getLogger(__name__)

# Report severities mapped onto stdlib logging levels
_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


class CircularChunkDependencyError(Exception):
    """Raised when chunk cycles are found and the abort policy is enabled."""

    def __init__(self, cycles: list[DependencyCycle], report: list[DiagnosticEvent]):
        self.cycles = cycles
        self.report = report
        super().__init__(
            f"Detected {len(cycles)} circular dependencies between chunks"
        )


class DetectChunkCyclesUseCase:
    """Use case for detecting circular dependencies between chunks.

    This use case derives the chunk graph from module imports, runs the
    detector on it and turns every cycle into diagnostic events. When the
    abort policy is enabled, finding a cycle raises CircularChunkDependencyError.
    """

    def __init__(
        self,
        detector: CircularDependencyDetector,
        graph_builder: ChunkGraphBuilder,
        throw_on_cycle: bool = False,
        show_module_detail: bool = False,
    ):
        """Initialize the use case.

        Args:
            detector: Circular dependency detector
            graph_builder: Builder deriving chunk edges from module imports
            throw_on_cycle: Default abort policy when a request sets none
            show_module_detail: Default module detail policy when a request sets none
        """
        self.detector = detector
        self.graph_builder = graph_builder
        self.throw_on_cycle = throw_on_cycle
        self.show_module_detail = show_module_detail

    async def execute(
        self, request: DetectChunkCyclesRequest
    ) -> DetectChunkCyclesResponse:
        """Execute the detect chunk cycles use case.

        Args:
            request: Bundle chunks, module imports and policy overrides

        Returns:
            DetectChunkCyclesResponse with the cycles and their report

        Raises:
            CircularChunkDependencyError: If cycles exist and throw_on_cycle is set
        """
        throw_on_cycle = (
            request.throw_on_cycle
            if request.throw_on_cycle is not None
            else self.throw_on_cycle
        )
        show_module_detail = (
            request.show_module_detail
            if request.show_module_detail is not None
            else self.show_module_detail
        )

        graph = self.graph_builder.build(
            [
                OutputChunk(chunk_id=chunk.chunk_id, module_ids=list(chunk.modules))
                for chunk in request.chunks
            ],
            [
                ModuleInfo(
                    module_id=module.module_id,
                    imported_ids=list(module.imported_ids),
                )
                for module in request.modules
            ],
        )

        paths = self.detector.detect_cycles(graph.chunk_ids, graph.chunk_edges)
        cycles = [DependencyCycle(path=path) for path in paths]
        report = build_report(cycles, graph, show_module_detail)

        if not cycles:
            logger.info(
                f"No circular dependencies between chunks: "
                f"chunks={len(graph.chunk_ids)}, chunk_edges={len(graph.chunk_edges)}"
            )

        for event in report:
            logger.log(_LOG_LEVELS[event.severity], event.message)

        if cycles and throw_on_cycle:
            raise CircularChunkDependencyError(cycles, report)

        return DetectChunkCyclesResponse(
            cycle_count=len(cycles),
            cycles=[self._to_cycle_dto(cycle, graph) for cycle in cycles],
            diagnostics=[
                DiagnosticDTO(severity=event.severity.value, message=event.message)
                for event in report
            ],
        )

    def _to_cycle_dto(self, cycle: DependencyCycle, graph: ChunkGraph) -> ChunkCycleDTO:
        """Convert a cycle entity to its DTO, attaching the module edges of each hop."""
        return ChunkCycleDTO(
            path=[str(node) for node in cycle.path],
            hops=[
                CycleHopDTO(
                    from_chunk=from_chunk,
                    to_chunk=to_chunk,
                    module_edges=[
                        ModuleEdgeDTO(
                            from_module=edge.from_module, to_module=edge.to_module
                        )
                        for edge in graph.module_edges_for(from_chunk, to_chunk)
                    ],
                )
                for from_chunk, to_chunk in cycle.hops()
            ],
        )


def build_report(
    cycles: list[DependencyCycle],
    graph: ChunkGraph,
    show_module_detail: bool,
) -> list[DiagnosticEvent]:
    """Turn detected cycles into diagnostic events.

    Args:
        cycles: Detected chunk cycles
        graph: Chunk graph the cycles were found in
        show_module_detail: Add the first module import behind every hop

    Returns:
        Diagnostic events, empty when there are no cycles
    """
    if not cycles:
        return []

    report = [
        DiagnosticEvent(
            severity=Severity.ERROR,
            message=f"Detected {len(cycles)} circular dependencies between chunks",
        )
    ]

    for number, cycle in enumerate(cycles, start=1):
        report.append(
            DiagnosticEvent(
                severity=Severity.WARNING,
                message=f"Cycle {number}: {cycle.format()}",
            )
        )
        if not show_module_detail:
            continue

        for from_chunk, to_chunk in cycle.hops():
            module_edges = graph.module_edges_for(from_chunk, to_chunk)
            if not module_edges:
                continue
            # Only the first import is reported per hop
            edge = module_edges[0]
            report.append(
                DiagnosticEvent(
                    severity=Severity.INFO,
                    message=(
                        f"{from_chunk} module {edge.from_module} imports "
                        f"{to_chunk} module {edge.to_module}"
                    ),
                )
            )

    return report
