"""
Graph Analysis for the Workflow Designer.

Pure functions over a workflow's nodes and edges: adjacency, cycle
detection, start/end discovery, reachability and topological ordering.
None of them raise on a finite graph, and none of them check that edge
endpoints exist; that is the validator's job.

Edges may point at ids that no node declares. Cycle detection and
topological sorting both treat such ids as extra vertices, placed after
the declared nodes in order of first appearance, so the two always agree
on whether a graph is acyclic.
"""

from typing import Dict, List, Optional, Sequence
from collections import Counter, deque

from designer.engine.node import BaseNode, NodeType
from designer.engine.workflow import Edge


# DFS vertex colours
_WHITE = 0  # not visited
_GRAY = 1   # on the current path
_BLACK = 2  # fully explored


def _vertex_ids(nodes: Sequence[BaseNode], edges: Sequence[Edge]) -> List[str]:
    """Declared node ids, then undeclared edge endpoints, without repeats."""
    seen: Dict[str, None] = {}
    for node in nodes:
        seen.setdefault(node.id)
    for edge in edges:
        seen.setdefault(edge.source)
        seen.setdefault(edge.target)
    return list(seen)


def build_adjacency(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> Dict[str, List[str]]:
    """
    Build an adjacency list from nodes and edges.

    Every node id maps to the ordered targets of its outgoing edges (empty
    if it has none). Edges from or to unknown ids are still recorded.

    Args:
        nodes: Workflow nodes
        edges: Workflow edges

    Returns:
        Dict of source id -> list of target ids
    """
    adjacency: Dict[str, List[str]] = {node.id: [] for node in nodes}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def detect_cycle(nodes: Sequence[BaseNode], edges: Sequence[Edge]) -> bool:
    """
    Check whether the graph contains a directed cycle.

    Depth-first search with an explicit stack. A vertex is gray while it is
    on the current path and black once all its successors are explored; an
    edge into a gray vertex closes a cycle. Self-loops are cycles. Every
    vertex is used as a root, so all components are covered.

    Returns:
        True if a cycle exists
    """
    adjacency = build_adjacency(nodes, edges)
    color: Dict[str, int] = {}

    for root in _vertex_ids(nodes, edges):
        if color.get(root, _WHITE) != _WHITE:
            continue

        color[root] = _GRAY
        stack = [(root, iter(adjacency.get(root, ())))]

        while stack:
            vertex, successors = stack[-1]
            for successor in successors:
                state = color.get(successor, _WHITE)
                if state == _GRAY:
                    return True
                if state == _WHITE:
                    color[successor] = _GRAY
                    stack.append((successor, iter(adjacency.get(successor, ()))))
                    break
            else:
                color[vertex] = _BLACK
                stack.pop()

    return False


def find_start_nodes(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> List[BaseNode]:
    """Nodes of type start or with no incoming edges, in input order."""
    in_degree = Counter(edge.target for edge in edges)
    return [
        node for node in nodes
        if node.type == NodeType.START or in_degree[node.id] == 0
    ]


def find_end_nodes(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> List[BaseNode]:
    """Nodes of type end or with no outgoing edges, in input order."""
    out_degree = Counter(edge.source for edge in edges)
    return [
        node for node in nodes
        if node.type == NodeType.END or out_degree[node.id] == 0
    ]


def find_disconnected_nodes(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> List[str]:
    """
    Find nodes that cannot be reached from any start node.

    If there are no start nodes at all, every node is disconnected.

    Returns:
        Ids of unreachable nodes, in input order
    """
    adjacency = build_adjacency(nodes, edges)
    to_visit = [node.id for node in find_start_nodes(nodes, edges)]
    reachable = set()

    while to_visit:
        node_id = to_visit.pop()
        if node_id in reachable:
            continue
        reachable.add(node_id)
        to_visit.extend(adjacency.get(node_id, ()))

    return [node.id for node in nodes if node.id not in reachable]


def topological_sort(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> Optional[List[BaseNode]]:
    """
    Order nodes so that every edge points forward (Kahn's algorithm).

    The queue is FIFO and is seeded with every zero in-degree vertex in
    input order, so ties resolve in favour of input order.
    Nodes sharing an id are emitted together, in input order.

    Returns:
        The ordered nodes, or None if the graph has a cycle
    """
    vertices = _vertex_ids(nodes, edges)
    adjacency = build_adjacency(nodes, edges)

    in_degree = dict.fromkeys(vertices, 0)
    for edge in edges:
        in_degree[edge.target] += 1

    members: Dict[str, List[BaseNode]] = {}
    for node in nodes:
        members.setdefault(node.id, []).append(node)

    queue = deque(v for v in vertices if in_degree[v] == 0)
    ordered: List[BaseNode] = []
    processed = 0

    while queue:
        vertex = queue.popleft()
        processed += 1
        ordered.extend(members.get(vertex, ()))

        for successor in adjacency.get(vertex, ()):
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    if processed < len(vertices):
        return None
    return ordered


def get_execution_order(
    nodes: Sequence[BaseNode],
    edges: Sequence[Edge]
) -> List[BaseNode]:
    """
    Order in which a simulation visits nodes.

    The topological order when one exists; otherwise the nodes in input
    order. The fallback is best effort only: it lets a malformed graph
    still produce a diagnostic trace.
    """
    ordered = topological_sort(nodes, edges)
    if ordered is None:
        return list(nodes)
    return ordered
