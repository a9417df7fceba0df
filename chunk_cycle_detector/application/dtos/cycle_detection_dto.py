"""Cycle detection DTOs.

This module defines data transfer objects for cycle detection workflows.
Uses dataclasses for application layer (not Pydantic - that's for infrastructure/API).
"""

from dataclasses import dataclass, field


@dataclass
class DetectGraphCyclesRequest:
    """Request to detect cycles in a raw directed graph.

    Attributes:
        nodes: Node identifiers
        edges: Directed (from, to) pairs
    """

    nodes: list[str]
    edges: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class DetectGraphCyclesResponse:
    """Result of a raw graph cycle detection.

    Attributes:
        has_cycles: Whether any cycle was found
        cyclic_nodes: Nodes that sit on at least one cycle, in input order
        cycles: Closed cycle paths in discovery order
    """

    has_cycles: bool
    cyclic_nodes: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)


@dataclass
class ChunkDTO:
    """Output chunk of a bundle.

    Attributes:
        chunk_id: Chunk file name
        modules: Module identifiers bundled into the chunk
    """

    chunk_id: str
    modules: list[str] = field(default_factory=list)


@dataclass
class ModuleDTO:
    """Import information of a bundled module.

    Attributes:
        module_id: Module identifier
        imported_ids: Statically imported module identifiers
    """

    module_id: str
    imported_ids: list[str] = field(default_factory=list)


@dataclass
class DetectChunkCyclesRequest:
    """Request to detect cycles between the chunks of a bundle.

    Attributes:
        chunks: Output chunks
        modules: Module import information
        throw_on_cycle: Abort when a cycle is found (None = use settings)
        show_module_detail: Report the module import behind each hop (None = use settings)
    """

    chunks: list[ChunkDTO]
    modules: list[ModuleDTO] = field(default_factory=list)
    throw_on_cycle: bool | None = None
    show_module_detail: bool | None = None


@dataclass
class ModuleEdgeDTO:
    """Module import crossing a chunk boundary.

    Attributes:
        from_module: Importing module
        to_module: Imported module
    """

    from_module: str
    to_module: str


@dataclass
class CycleHopDTO:
    """One chunk-to-chunk step of a cycle.

    Attributes:
        from_chunk: Chunk the hop starts from
        to_chunk: Chunk the hop leads to
        module_edges: Module imports justifying the hop
    """

    from_chunk: str
    to_chunk: str
    module_edges: list[ModuleEdgeDTO] = field(default_factory=list)


@dataclass
class ChunkCycleDTO:
    """A detected chunk cycle.

    Attributes:
        path: Closed chunk path (first chunk repeated at the end)
        hops: Consecutive hops of the path
    """

    path: list[str]
    hops: list[CycleHopDTO] = field(default_factory=list)


@dataclass
class DiagnosticDTO:
    """A report line.

    Attributes:
        severity: info, warning or error
        message: Human-readable text
    """

    severity: str
    message: str


@dataclass
class DetectChunkCyclesResponse:
    """Result of a bundle cycle detection.

    Attributes:
        cycle_count: Number of cycles found
        cycles: Detected cycles in discovery order
        diagnostics: Report lines, empty when the bundle is acyclic
    """

    cycle_count: int
    cycles: list[ChunkCycleDTO] = field(default_factory=list)
    diagnostics: list[DiagnosticDTO] = field(default_factory=list)
