"""Unit tests for cycle detection DTOs."""

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    ChunkDTO,
    DetectChunkCyclesRequest,
    DetectGraphCyclesRequest,
)


class TestDetectGraphCyclesRequest:
    """Test DetectGraphCyclesRequest DTO."""

    def test_edges_default_to_empty(self):
        """Test a graph may be given without edges."""
        request = DetectGraphCyclesRequest(nodes=["A"])

        assert request.edges == []


class TestDetectChunkCyclesRequest:
    """Test DetectChunkCyclesRequest DTO."""

    def test_policies_default_to_unset(self):
        """Test unset policies defer to the configured defaults."""
        request = DetectChunkCyclesRequest(chunks=[ChunkDTO(chunk_id="a.js")])

        assert request.modules == []
        assert request.throw_on_cycle is None
        assert request.show_module_detail is None
