"""Topological reducer module.

This module implements Kahn's algorithm to strip every node that cannot be
part of a cycle, leaving only the nodes that participate in at least one.
"""

from collections import deque
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

NodeId = Hashable
Edge = tuple[NodeId, NodeId]
AdjacencyMap = Mapping[NodeId, tuple[NodeId, ...]]


@dataclass(frozen=True)
class ReductionResult:
    """Outcome of a topological reduction.

    Attributes:
        cyclic_nodes: Nodes that sit on at least one cycle, in input order
        adjacency: Read-only map of every declared node to its deduplicated,
            self-loop-free successors
    """

    cyclic_nodes: list[NodeId] = field(default_factory=list)
    adjacency: AdjacencyMap = field(default_factory=lambda: MappingProxyType({}))

    @property
    def has_cycles(self) -> bool:
        """Whether at least one node survived the reduction."""
        return bool(self.cyclic_nodes)


class TopologicalReducer:
    """Runs Kahn's algorithm over a directed graph.

    Malformed input is absorbed rather than rejected:
    - self-loops never enter the adjacency map nor count towards in-degree
    - duplicate edges count once
    - edges with an undeclared endpoint are skipped

    Kahn's algorithm also leaves behind nodes that are merely reachable from a
    cycle (their in-degree never drops to zero). The unresolved remainder is
    therefore narrowed to its non-trivial strongly connected components, so
    that only nodes lying on a closed walk are reported.

    Time Complexity: O(V + E)
    Space Complexity: O(V + E)
    """

    def reduce(
        self, nodes: Iterable[NodeId], edges: Iterable[Edge]
    ) -> ReductionResult:
        """Reduce the graph to the nodes that sit on a cycle.

        Args:
            nodes: Declared node identifiers
            edges: Directed (from, to) pairs

        Returns:
            ReductionResult with the cyclic nodes and the adjacency map of
            the whole graph (the extractor needs full reachability)
        """
        in_degree: dict[NodeId, int] = {}
        successors: dict[NodeId, list[NodeId]] = {}
        for node in nodes:
            if node not in successors:
                in_degree[node] = 0
                successors[node] = []

        seen_edges: set[Edge] = set()
        for source, target in edges:
            if source == target:
                continue
            if source not in successors or target not in successors:
                continue
            if (source, target) in seen_edges:
                continue
            seen_edges.add((source, target))
            successors[source].append(target)
            in_degree[target] += 1

        adjacency: AdjacencyMap = MappingProxyType(
            {node: tuple(targets) for node, targets in successors.items()}
        )

        queue = deque(node for node, degree in in_degree.items() if degree == 0)
        visited: set[NodeId] = set()

        while queue:
            current = queue.popleft()
            visited.add(current)

            for successor in adjacency[current]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    queue.append(successor)

        if len(visited) == len(adjacency):
            return ReductionResult(cyclic_nodes=[], adjacency=adjacency)

        unresolved = [node for node in adjacency if node not in visited]
        on_cycle = _nodes_in_cyclic_components(unresolved, adjacency)
        cyclic_nodes = [node for node in unresolved if node in on_cycle]
        return ReductionResult(cyclic_nodes=cyclic_nodes, adjacency=adjacency)


def _nodes_in_cyclic_components(
    nodes: list[NodeId], adjacency: AdjacencyMap
) -> set[NodeId]:
    """Collect the nodes of every strongly connected component of size > 1.

    Iterative Tarjan restricted to ``nodes``. Self-loops never reach the
    adjacency map, so a single-node component is never a cycle.

    Args:
        nodes: Candidate nodes (the ones Kahn's algorithm could not resolve)
        adjacency: Successors of every node in the graph

    Returns:
        Set of nodes lying on at least one cycle
    """
    candidates = set(nodes)
    index: dict[NodeId, int] = {}
    lowlink: dict[NodeId, int] = {}
    stack: list[NodeId] = []
    on_stack: set[NodeId] = set()
    result: set[NodeId] = set()
    counter = 0

    for start in nodes:
        if start in index:
            continue

        index[start] = lowlink[start] = counter
        counter += 1
        stack.append(start)
        on_stack.add(start)
        work = [(start, iter(adjacency[start]))]

        while work:
            node, successors = work[-1]
            advanced = False

            for successor in successors:
                if successor not in candidates:
                    continue
                if successor not in index:
                    index[successor] = lowlink[successor] = counter
                    counter += 1
                    stack.append(successor)
                    on_stack.add(successor)
                    work.append((successor, iter(adjacency[successor])))
                    advanced = True
                    break
                if successor in on_stack:
                    lowlink[node] = min(lowlink[node], index[successor])

            if advanced:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            if lowlink[node] == index[node]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                if len(component) > 1:
                    result.update(component)

    return result
