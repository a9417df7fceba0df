"""Unit tests for cycle detection API schemas.

Tests validation rules and defaults for the Pydantic models used in the
cycle detection API endpoints.
"""

import pytest
from pydantic import ValidationError

from chunk_cycle_detector.infrastructure.api.schemas.cycle_schema import (
    BundleCyclesApiRequest,
    BundleCyclesApiResponse,
    ChunkApiModel,
    GraphCyclesApiRequest,
    ModuleApiModel,
)
from chunk_cycle_detector.infrastructure.api.schemas.error_schema import (
    ProblemDetails,
)


# ==================== GraphCyclesApiRequest ====================


class TestGraphCyclesApiRequest:
    """Test GraphCyclesApiRequest validation."""

    def test_edges_parsed_as_pairs(self):
        """Test JSON arrays become (from, to) tuples."""
        request = GraphCyclesApiRequest(nodes=["a", "b"], edges=[["a", "b"]])
        assert request.edges == [("a", "b")]

    def test_edges_default_to_empty(self):
        """Test edges are optional."""
        assert GraphCyclesApiRequest(nodes=["a"]).edges == []

    def test_nodes_required(self):
        """Test nodes must be provided."""
        with pytest.raises(ValidationError):
            GraphCyclesApiRequest(edges=[])

    def test_edge_with_three_entries_rejected(self):
        """Test an edge must have exactly two endpoints."""
        with pytest.raises(ValidationError):
            GraphCyclesApiRequest(nodes=["a", "b", "c"], edges=[["a", "b", "c"]])


# ==================== BundleCyclesApiRequest ====================


class TestBundleCyclesApiRequest:
    """Test BundleCyclesApiRequest validation."""

    def test_defaults_applied(self):
        """Test policy overrides are unset by default."""
        request = BundleCyclesApiRequest(chunks=[{"chunk_id": "a.js"}])

        assert request.modules == []
        assert request.throw_on_cycle is None
        assert request.show_module_detail is None
        assert request.chunks[0].modules == []

    def test_empty_chunk_id_rejected(self):
        """Test chunk ids must not be empty."""
        with pytest.raises(ValidationError):
            ChunkApiModel(chunk_id="")

    def test_empty_module_id_rejected(self):
        """Test module ids must not be empty."""
        with pytest.raises(ValidationError):
            ModuleApiModel(module_id="")

    def test_chunks_required(self):
        """Test chunks must be provided."""
        with pytest.raises(ValidationError):
            BundleCyclesApiRequest(modules=[])


# ==================== Responses ====================


class TestBundleCyclesApiResponse:
    """Test BundleCyclesApiResponse validation."""

    def test_negative_cycle_count_rejected(self):
        """Test cycle_count cannot be negative."""
        with pytest.raises(ValidationError):
            BundleCyclesApiResponse(cycle_count=-1)


class TestProblemDetails:
    """Test ProblemDetails serialization."""

    def test_cycles_omitted_when_unset(self):
        """Test the cycles extension only appears for cycle problems."""
        problem = ProblemDetails(
            type="about:blank",
            title="Bad Request",
            status=400,
            detail="nope",
            instance="/x",
        )

        assert "cycles" not in problem.model_dump(exclude_none=True)
