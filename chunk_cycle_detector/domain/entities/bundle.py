"""Bundle entities module.

This module defines the build output entities (chunks and modules) from which
the chunk-level dependency graph is derived.
"""

from dataclasses import dataclass, field


@dataclass
class OutputChunk:
    """A compiled output unit of a bundle.

    Attributes:
        chunk_id: Chunk file name (e.g., "assets/index-3f2a.js")
        module_ids: Identifiers of the source modules bundled into the chunk
    """

    chunk_id: str
    module_ids: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.chunk_id:
            raise ValueError("chunk_id cannot be empty")


@dataclass
class ModuleInfo:
    """Import information for a single source module.

    Attributes:
        module_id: Module identifier (usually its resolved path)
        imported_ids: Identifiers of the modules it imports statically
    """

    module_id: str
    imported_ids: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.module_id:
            raise ValueError("module_id cannot be empty")


@dataclass(frozen=True)
class ModuleEdge:
    """A module import that crosses a chunk boundary.

    Attributes:
        from_module: Importing module
        to_module: Imported module
    """

    from_module: str
    to_module: str


@dataclass
class ChunkGraph:
    """Chunk-level dependency graph of a bundle.

    Attributes:
        chunk_ids: Every chunk of the bundle, in bundle order
        chunk_edges: One (from_chunk, to_chunk) pair per crossing import
        module_edges: Module imports justifying each chunk-to-chunk hop
    """

    chunk_ids: list[str] = field(default_factory=list)
    chunk_edges: list[tuple[str, str]] = field(default_factory=list)
    module_edges: dict[tuple[str, str], list[ModuleEdge]] = field(
        default_factory=dict
    )

    def add_module_edge(
        self, from_chunk: str, to_chunk: str, edge: ModuleEdge
    ) -> None:
        """Record a crossing import and the chunk edge it implies.

        Args:
            from_chunk: Chunk of the importing module
            to_chunk: Chunk of the imported module
            edge: The module import itself
        """
        self.chunk_edges.append((from_chunk, to_chunk))
        self.module_edges.setdefault((from_chunk, to_chunk), []).append(edge)

    def module_edges_for(self, from_chunk: str, to_chunk: str) -> list[ModuleEdge]:
        """Module imports behind a chunk hop (empty when there are none)."""
        return self.module_edges.get((from_chunk, to_chunk), [])
