"""Cycle extractor module.

This module enumerates simple cycles with a depth-first search restricted to
the nodes the topological reducer left behind.
"""

from collections.abc import Iterator, Sequence

from chunk_cycle_detector.domain.services.topological_reducer import (
    AdjacencyMap,
    NodeId,
)

_EXHAUSTED = object()


class CycleExtractor:
    """Extracts closed cycle paths from the cyclic subgraph.

    The search uses an explicit frame stack instead of recursion so that long
    dependency chains cannot exhaust the interpreter's recursion limit. Each
    frame holds the successor iterator of the node on top of the path stack.

    A node is marked globally visited once a DFS enters it and is never
    entered again from a later root. A second cycle passing through an
    already finished node is therefore not reported.

    Time Complexity: O(V + E) amortized over all roots
    Space Complexity: O(V)
    """

    def extract(
        self, cyclic_nodes: Sequence[NodeId], adjacency: AdjacencyMap
    ) -> list[list[NodeId]]:
        """Enumerate cycles in discovery order.

        Args:
            cyclic_nodes: Nodes that sit on at least one cycle, in input order
            adjacency: Successors of every node in the graph

        Returns:
            List of cycle paths, each closed by repeating its first node
        """
        cycle_paths: list[list[NodeId]] = []
        if not cyclic_nodes:
            return cycle_paths

        domain = set(cyclic_nodes)
        globally_visited: set[NodeId] = set()

        for root in cyclic_nodes:
            if root not in globally_visited:
                self._search(root, adjacency, domain, globally_visited, cycle_paths)

        return cycle_paths

    def _search(
        self,
        root: NodeId,
        adjacency: AdjacencyMap,
        domain: set[NodeId],
        globally_visited: set[NodeId],
        cycle_paths: list[list[NodeId]],
    ) -> None:
        """Run one DFS tree rooted at ``root``.

        Args:
            root: Node to start from (not yet globally visited)
            adjacency: Successors of every node in the graph
            domain: Cyclic nodes; successors outside it are skipped
            globally_visited: Nodes entered by any DFS so far (mutated)
            cycle_paths: Output list of discovered cycles (mutated)
        """
        path_stack: list[NodeId] = [root]
        on_stack: set[NodeId] = {root}
        globally_visited.add(root)
        frames = [self._successors(root, adjacency, domain)]

        while frames:
            current = next(frames[-1], _EXHAUSTED)

            if current is _EXHAUSTED:
                # Backtrack
                frames.pop()
                on_stack.discard(path_stack.pop())
                continue

            if current in on_stack:
                loop_start = path_stack.index(current)
                cycle_paths.append(path_stack[loop_start:] + [current])
                continue

            if current in globally_visited:
                continue

            globally_visited.add(current)
            path_stack.append(current)
            on_stack.add(current)
            frames.append(self._successors(current, adjacency, domain))

    @staticmethod
    def _successors(
        node: NodeId, adjacency: AdjacencyMap, domain: set[NodeId]
    ) -> Iterator[NodeId]:
        return (
            successor
            for successor in adjacency.get(node, ())
            if successor in domain
        )
