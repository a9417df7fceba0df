"""Unit tests for DetectChunkCyclesUseCase."""

import logging

import pytest
from unittest.mock import Mock

from chunk_cycle_detector.application.dtos.cycle_detection_dto import (
    ChunkDTO,
    DetectChunkCyclesRequest,
    ModuleDTO,
    ModuleEdgeDTO,
)
from chunk_cycle_detector.application.use_cases.detect_chunk_cycles import (
    CircularChunkDependencyError,
    DetectChunkCyclesUseCase,
    build_report,
)
from chunk_cycle_detector.domain.entities.bundle import ChunkGraph, ModuleEdge
from chunk_cycle_detector.domain.entities.dependency_cycle import (
    DependencyCycle,
    Severity,
)
from chunk_cycle_detector.domain.services.chunk_graph_builder import (
    ChunkGraphBuilder,
)
from chunk_cycle_detector.domain.services.circular_dependency_detector import (
    CircularDependencyDetector,
)


def _cyclic_bundle(**overrides) -> DetectChunkCyclesRequest:
    """index.js and vendor.js import each other."""
    return DetectChunkCyclesRequest(
        chunks=[
            ChunkDTO(chunk_id="index.js", modules=["src/main.ts"]),
            ChunkDTO(chunk_id="vendor.js", modules=["src/lib.ts"]),
        ],
        modules=[
            ModuleDTO(module_id="src/main.ts", imported_ids=["src/lib.ts"]),
            ModuleDTO(module_id="src/lib.ts", imported_ids=["src/main.ts"]),
        ],
        **overrides,
    )


def _acyclic_bundle(**overrides) -> DetectChunkCyclesRequest:
    """index.js imports vendor.js only."""
    return DetectChunkCyclesRequest(
        chunks=[
            ChunkDTO(chunk_id="index.js", modules=["src/main.ts"]),
            ChunkDTO(chunk_id="vendor.js", modules=["src/lib.ts"]),
        ],
        modules=[ModuleDTO(module_id="src/main.ts", imported_ids=["src/lib.ts"])],
        **overrides,
    )


class TestDetectChunkCyclesUseCase:
    """Test DetectChunkCyclesUseCase."""

    @pytest.fixture
    def detector(self):
        """Create real circular dependency detector."""
        return CircularDependencyDetector()

    @pytest.fixture
    def graph_builder(self):
        """Create real chunk graph builder."""
        return ChunkGraphBuilder()

    @pytest.fixture
    def use_case(self, detector, graph_builder):
        """Create use case with default policies."""
        return DetectChunkCyclesUseCase(detector=detector, graph_builder=graph_builder)

    @pytest.mark.asyncio
    async def test_acyclic_bundle(self, use_case):
        """Test an acyclic bundle has no cycles and an empty report."""
        # Act
        response = await use_case.execute(_acyclic_bundle())

        # Assert
        assert response.cycle_count == 0
        assert response.cycles == []
        assert response.diagnostics == []

    @pytest.mark.asyncio
    async def test_cyclic_bundle_report(self, use_case):
        """Test a cycle produces an error header and one warning per cycle."""
        # Act
        response = await use_case.execute(_cyclic_bundle())

        # Assert
        assert response.cycle_count == 1
        assert response.cycles[0].path == ["index.js", "vendor.js", "index.js"]
        assert [(d.severity, d.message) for d in response.diagnostics] == [
            ("error", "Detected 1 circular dependencies between chunks"),
            ("warning", "Cycle 1: index.js → vendor.js → index.js"),
        ]

    @pytest.mark.asyncio
    async def test_cycle_hops_carry_module_edges(self, use_case):
        """Test each hop lists the imports behind it."""
        # Act
        response = await use_case.execute(_cyclic_bundle())

        # Assert
        hops = response.cycles[0].hops
        assert [(hop.from_chunk, hop.to_chunk) for hop in hops] == [
            ("index.js", "vendor.js"),
            ("vendor.js", "index.js"),
        ]
        assert hops[0].module_edges == [
            ModuleEdgeDTO(from_module="src/main.ts", to_module="src/lib.ts")
        ]
        assert hops[1].module_edges == [
            ModuleEdgeDTO(from_module="src/lib.ts", to_module="src/main.ts")
        ]

    @pytest.mark.asyncio
    async def test_module_detail_from_request(self, use_case):
        """Test module detail lines are added when the request asks for them."""
        # Act
        response = await use_case.execute(_cyclic_bundle(show_module_detail=True))

        # Assert
        assert [(d.severity, d.message) for d in response.diagnostics[2:]] == [
            ("info", "index.js module src/main.ts imports vendor.js module src/lib.ts"),
            ("info", "vendor.js module src/lib.ts imports index.js module src/main.ts"),
        ]

    @pytest.mark.asyncio
    async def test_request_overrides_default_policy(self, detector, graph_builder):
        """Test an explicit False in the request beats a True default."""
        # Arrange
        use_case = DetectChunkCyclesUseCase(
            detector=detector,
            graph_builder=graph_builder,
            throw_on_cycle=True,
            show_module_detail=True,
        )

        # Act
        response = await use_case.execute(
            _cyclic_bundle(throw_on_cycle=False, show_module_detail=False)
        )

        # Assert
        assert response.cycle_count == 1
        assert len(response.diagnostics) == 2

    @pytest.mark.asyncio
    async def test_throw_on_cycle_raises(self, detector, graph_builder):
        """Test the abort policy raises with the cycles and their report."""
        # Arrange
        use_case = DetectChunkCyclesUseCase(
            detector=detector, graph_builder=graph_builder, throw_on_cycle=True
        )

        # Act & Assert
        with pytest.raises(CircularChunkDependencyError) as exc_info:
            await use_case.execute(_cyclic_bundle())

        error = exc_info.value
        assert str(error) == "Detected 1 circular dependencies between chunks"
        assert [cycle.path for cycle in error.cycles] == [
            ["index.js", "vendor.js", "index.js"]
        ]
        assert error.report[0].severity == Severity.ERROR

    @pytest.mark.asyncio
    async def test_report_logged_before_raising(self, use_case, caplog):
        """Test every report line is logged even when the abort policy fires."""
        # Act
        with caplog.at_level(logging.INFO):
            with pytest.raises(CircularChunkDependencyError) as exc_info:
                await use_case.execute(
                    _cyclic_bundle(throw_on_cycle=True, show_module_detail=True)
                )

        # Assert
        logged = [
            (record.levelno, record.getMessage())
            for record in caplog.records
            if record.name.endswith("detect_chunk_cycles")
        ]
        assert logged == [
            (logging.ERROR, "Detected 1 circular dependencies between chunks"),
            (logging.WARNING, "Cycle 1: index.js → vendor.js → index.js"),
            (logging.INFO, "index.js module src/main.ts imports vendor.js module src/lib.ts"),
            (logging.INFO, "vendor.js module src/lib.ts imports index.js module src/main.ts"),
        ]
        assert [event.message for event in exc_info.value.report] == [
            message for _, message in logged
        ]

    @pytest.mark.asyncio
    async def test_throw_on_cycle_from_request(self, use_case):
        """Test the request alone can enable the abort policy."""
        with pytest.raises(CircularChunkDependencyError):
            await use_case.execute(_cyclic_bundle(throw_on_cycle=True))

    @pytest.mark.asyncio
    async def test_throw_on_cycle_ignored_when_acyclic(self, use_case):
        """Test the abort policy only fires when a cycle exists."""
        # Act
        response = await use_case.execute(_acyclic_bundle(throw_on_cycle=True))

        # Assert
        assert response.cycle_count == 0

    @pytest.mark.asyncio
    async def test_detector_receives_chunk_graph(self, graph_builder):
        """Test the detector runs on chunk ids and chunk edges."""
        # Arrange
        detector = Mock()
        detector.detect_cycles.return_value = []
        use_case = DetectChunkCyclesUseCase(detector=detector, graph_builder=graph_builder)

        # Act
        await use_case.execute(_cyclic_bundle())

        # Assert
        detector.detect_cycles.assert_called_once_with(
            ["index.js", "vendor.js"],
            [("index.js", "vendor.js"), ("vendor.js", "index.js")],
        )


class TestBuildReport:
    """Test the report builder."""

    def test_no_cycles_no_events(self):
        """Test nothing is reported for an acyclic graph."""
        assert build_report([], ChunkGraph(), show_module_detail=True) == []

    def test_cycles_numbered_from_one(self):
        """Test cycles are numbered in discovery order."""
        cycles = [
            DependencyCycle(path=["a", "b", "a"]),
            DependencyCycle(path=["c", "d", "c"]),
        ]

        report = build_report(cycles, ChunkGraph(), show_module_detail=False)

        assert [event.message for event in report] == [
            "Detected 2 circular dependencies between chunks",
            "Cycle 1: a → b → a",
            "Cycle 2: c → d → c",
        ]

    def test_only_first_module_edge_reported_per_hop(self):
        """Test module detail names the first import of each hop only."""
        graph = ChunkGraph(chunk_ids=["a", "b"])
        graph.add_module_edge("a", "b", ModuleEdge("a1", "b1"))
        graph.add_module_edge("a", "b", ModuleEdge("a2", "b1"))
        graph.add_module_edge("b", "a", ModuleEdge("b1", "a1"))

        report = build_report(
            [DependencyCycle(path=["a", "b", "a"])], graph, show_module_detail=True
        )

        assert [event.message for event in report if event.severity == Severity.INFO] == [
            "a module a1 imports b module b1",
            "b module b1 imports a module a1",
        ]

    def test_hop_without_module_edges_skipped(self):
        """Test a hop with no recorded import gets no detail line."""
        report = build_report(
            [DependencyCycle(path=["a", "b", "a"])], ChunkGraph(), show_module_detail=True
        )

        assert [event.severity for event in report] == [Severity.ERROR, Severity.WARNING]
