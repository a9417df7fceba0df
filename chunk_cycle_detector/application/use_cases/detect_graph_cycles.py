"""Detect graph cycles use case.

This module implements the use case for detecting cycles in a raw directed
graph supplied as node identifiers and (from, to) edges.
"""

import logging

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    DetectGraphCyclesRequest,
    DetectGraphCyclesResponse,
)
from chunk_cycle_detector.domain.services.circular_dependency_detector import (
    CircularDependencyDetector,
)

logger = logging.getLogger(__name__)


class DetectGraphCyclesUseCase:
    """Use case for detecting cycles in a raw directed graph.

    Runs Kahn's reduction followed by DFS extraction and reports the cyclic
    nodes alongside every discovered cycle path.
    """

    def __init__(self, detector: CircularDependencyDetector):
        """Initialize the use case.

        Args:
            detector: Circular dependency detector
        """
        self.detector = detector

    async def execute(
        self, request: DetectGraphCyclesRequest
    ) -> DetectGraphCyclesResponse:
        """Execute the detect graph cycles use case.

        Args:
            request: Graph nodes and edges

        Returns:
            DetectGraphCyclesResponse with the cyclic nodes and cycle paths
        """
        result = self.detector.detect(request.nodes, request.edges)

        logger.info(
            f"Graph cycle detection completed: nodes={len(request.nodes)}, "
            f"edges={len(request.edges)}, cyclic_nodes={len(result.cyclic_nodes)}, "
            f"cycles={len(result.cycles)}"
        )

        return DetectGraphCyclesResponse(
            has_cycles=result.has_cycles,
            cyclic_nodes=list(result.cyclic_nodes),
            cycles=[list(cycle) for cycle in result.cycles],
        )
