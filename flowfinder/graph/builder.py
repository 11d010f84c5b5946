"""Route graph construction from node and link records.

The graph is always rebuilt from the full link table, never updated
incrementally, so a planning request can never observe a stale edge.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..domain.errors import DataIntegrityError
from ..domain.models import Edge, Graph, GraphSummary, Link, Node


def build_graph(nodes: Iterable[Node], links: Iterable[Link]) -> Graph:
    """Build the adjacency structure of the venue map.

    Parameters
    ----------
    nodes:
        Complete node table. Every node becomes a vertex, including
        nodes without any link.
    links:
        Complete link table. Undirected links produce an edge in each
        direction with identical cost and link id.

    Returns
    -------
    Graph
        Mapping of node id to its outgoing edges, in link order.

    Raises
    ------
    DataIntegrityError
        If a link references a node id absent from the node table.
    """
    graph: Dict[int, List[Edge]] = {node.id: [] for node in nodes}

    for link in links:
        for node_id in (link.from_node_id, link.to_node_id):
            if node_id not in graph:
                raise DataIntegrityError(
                    f"Link {link.id} references unknown node {node_id}",
                    link_id=link.id,
                    node_id=node_id,
                )

        cost = link.cost
        graph[link.from_node_id].append(Edge(link.to_node_id, cost, link.id))
        if not link.is_directed:
            graph[link.to_node_id].append(Edge(link.from_node_id, cost, link.id))

    return graph


def outgoing_edges(graph: Graph, node_id: int) -> Sequence[Edge]:
    """Edges leaving ``node_id``; empty for isolated or unknown nodes."""
    return graph.get(node_id, ())


def summarize_graph(graph: Graph, link_count: int = 0) -> GraphSummary:
    edge_count = sum(len(edges) for edges in graph.values())
    reached = {edge.to_node_id for edges in graph.values() for edge in edges}
    isolated = tuple(
        sorted(node_id for node_id, edges in graph.items() if not edges and node_id not in reached)
    )
    return GraphSummary(
        node_count=len(graph),
        link_count=link_count,
        edge_count=edge_count,
        isolated_node_ids=isolated,
    )
