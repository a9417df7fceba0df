"""Integration tests for detection tracing.

Tests that trace_detection names its span after the graph kind, sets the
size and cycle attributes, and records the detection metrics.
"""

from unittest.mock import call, patch

import pytest

from chunk_cycle_detector.infrastructure.observability import metrics, tracing
from chunk_cycle_detector.infrastructure.observability.tracing import (
    trace_detection,
)


def _runs(graph_kind: str, outcome: str) -> float:
    return metrics.cycle_detection_runs_total.labels(
        graph_kind=graph_kind, outcome=outcome
    )._value.get()


def _cycles(graph_kind: str) -> float:
    return metrics.cycles_detected_total.labels(graph_kind=graph_kind)._value.get()


class TestTraceDetection:
    """Tests for the trace_detection context manager."""

    def test_span_named_after_graph_kind(self):
        """Test span name and attributes use the graph kind as prefix."""
        # Arrange
        with patch.object(tracing, "_tracer") as tracer:
            span = tracer.start_as_current_span.return_value.__enter__.return_value

            # Act
            with trace_detection("bundle", chunks=2, modules=5) as run:
                run.cycles = 1

        # Assert
        tracer.start_as_current_span.assert_called_once_with("detect_bundle_cycles")
        assert span.set_attribute.call_args_list == [
            call("bundle.chunks", 2),
            call("bundle.modules", 5),
            call("bundle.cycles", 1),
        ]
        assert run.span is span

    def test_cyclic_run_recorded(self):
        """Test cycles set on the run reach the cycle counter."""
        # Arrange
        runs_before = _runs("graph", "cyclic")
        cycles_before = _cycles("graph")

        # Act
        with trace_detection("graph", nodes=4, edges=5) as run:
            run.cycles = 2

        # Assert
        assert _runs("graph", "cyclic") == runs_before + 1
        assert _cycles("graph") == cycles_before + 2

    def test_acyclic_run_recorded(self):
        """Test a run that never sets cycles counts as acyclic."""
        # Arrange
        runs_before = _runs("graph", "acyclic")
        cycles_before = _cycles("graph")

        # Act
        with trace_detection("graph", nodes=2, edges=1) as run:
            pass

        # Assert
        assert run.cycles == 0
        assert _runs("graph", "acyclic") == runs_before + 1
        assert _cycles("graph") == cycles_before

    def test_recorded_when_block_raises(self):
        """Test an aborted bundle run still records its cycles."""
        # Arrange
        runs_before = _runs("bundle", "cyclic")
        cycles_before = _cycles("bundle")

        # Act
        with pytest.raises(RuntimeError):
            with trace_detection("bundle", chunks=2, modules=2) as run:
                run.cycles = 1
                raise RuntimeError("aborted")

        # Assert
        assert _runs("bundle", "cyclic") == runs_before + 1
        assert _cycles("bundle") == cycles_before + 1

    def test_conflict_response_recorded(self, client):
        """Test a 409 from the abort policy still counts the cycles found."""
        # Arrange
        cycles_before = _cycles("bundle")

        # Act
        response = client.post(
            "/api/v1/bundles/cycles",
            json={
                "chunks": [
                    {"chunk_id": "a.js", "modules": ["a"]},
                    {"chunk_id": "b.js", "modules": ["b"]},
                ],
                "modules": [
                    {"module_id": "a", "imported_ids": ["b"]},
                    {"module_id": "b", "imported_ids": ["a"]},
                ],
                "throw_on_cycle": True,
            },
        )

        # Assert
        assert response.status_code == 409
        assert _cycles("bundle") == cycles_before + 1
