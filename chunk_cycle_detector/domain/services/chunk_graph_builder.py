"""Chunk graph builder module.

Derives the chunk-level dependency graph of a bundle from the module-level
imports of the modules each chunk contains.
"""

from collections.abc import Iterable

from chunk_cycle_detector.domain.entities.bundle import (
    ChunkGraph,
    ModuleEdge,
    ModuleInfo,
    OutputChunk,
)


class ChunkGraphBuilder:
    """Builds a ChunkGraph from output chunks and module import info.

    Rules:
    - a module belongs to the last chunk that lists it
    - imports of modules that are not in any chunk are dropped
    - imports between modules of the same chunk are dropped
    - every remaining import yields one chunk edge (duplicates kept)
    """

    def build(
        self,
        chunks: Iterable[OutputChunk],
        modules: Iterable[ModuleInfo],
    ) -> ChunkGraph:
        """Build the chunk graph.

        Args:
            chunks: Output chunks of the bundle, in bundle order
            modules: Import information for bundled modules

        Returns:
            ChunkGraph with chunk ids, chunk edges and the module edges that
            justify each chunk-to-chunk hop
        """
        module_to_chunk: dict[str, str] = {}
        chunk_ids: list[str] = []

        for chunk in chunks:
            if chunk.chunk_id not in chunk_ids:
                chunk_ids.append(chunk.chunk_id)
            for module_id in chunk.module_ids:
                module_to_chunk[module_id] = chunk.chunk_id

        module_info_by_id = {info.module_id: info for info in modules}

        graph = ChunkGraph(chunk_ids=chunk_ids)

        for module_id, chunk_id in module_to_chunk.items():
            info = module_info_by_id.get(module_id)
            if info is None:
                continue

            for imported_id in info.imported_ids:
                imported_chunk_id = module_to_chunk.get(imported_id)
                if imported_chunk_id is None or imported_chunk_id == chunk_id:
                    continue

                graph.add_module_edge(
                    chunk_id,
                    imported_chunk_id,
                    ModuleEdge(from_module=module_id, to_module=imported_id),
                )

        return graph
