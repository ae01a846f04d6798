#!/usr/bin/env python3
"""
graph_store.py

In-memory directed multigraph of relationship records.

Nodes are dense integer handles (0, 1, 2, ... in order of first appearance),
each bound to exactly one external identifier. Edges are stored one per
record, parallel edges included. After ingestion the store is frozen and only
the read side is used.
"""

import networkx as nx

from graph_errors import GraphFrozenError


def node_label(external_id) -> str:
    return f"Node {external_id}"


class GraphStore:
    def __init__(self):
        self._G = nx.MultiDiGraph()
        self._external_ids = []
        self._edges = []

    # --- write side (ingestion only) ---

    def add_node(self, external_id, label=None) -> int:
        if self.is_frozen:
            raise GraphFrozenError("add_node")
        handle = len(self._external_ids)
        self._G.add_node(
            handle,
            label=label if label is not None else node_label(external_id),
            external_id=external_id,
        )
        self._external_ids.append(external_id)
        return handle

    def add_edge(self, source: int, target: int):
        if self.is_frozen:
            raise GraphFrozenError("add_edge")
        for h in (source, target):
            if h not in self._G:
                raise KeyError(f"Unknown node handle {h}")
        # no duplicate check: every record becomes its own edge
        self._G.add_edge(source, target)
        self._edges.append((source, target))

    def freeze(self):
        if not self.is_frozen:
            nx.freeze(self._G)
        return self

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self._G)

    # --- read side ---

    def nodes(self):
        """Node handles in creation order."""
        return list(self._G.nodes)

    def outgoing_edges(self, node: int):
        return list(self._G.out_edges(node))

    def out_degree(self, node: int) -> int:
        return self._G.out_degree(node)

    def node_count(self) -> int:
        return self._G.number_of_nodes()

    def edge_count(self) -> int:
        return self._G.number_of_edges()

    def edges(self):
        """Every stored edge in ingestion order."""
        return list(self._edges)

    def label(self, node: int) -> str:
        return self._G.nodes[node]["label"]

    def external_id(self, node: int):
        return self._external_ids[node]

    def to_networkx(self) -> nx.MultiDiGraph:
        return self._G


class NodeRegistry:
    """Maps external identifiers to node handles, creating nodes on first sight."""

    def __init__(self, store: GraphStore):
        self.store = store
        self._handles = {}

    def resolve(self, external_id) -> int:
        handle = self._handles.get(external_id)
        if handle is None:
            handle = self.store.add_node(external_id, node_label(external_id))
            self._handles[external_id] = handle
        return handle

    def handle_for(self, external_id):
        return self._handles.get(external_id)

    def external_id(self, handle: int):
        return self.store.external_id(handle)

    def __contains__(self, external_id):
        return external_id in self._handles

    def __len__(self):
        return len(self._handles)


def build_graph(records, logger=None):
    """
    Build a frozen (registry, store) pair from (from_id, to_id) records.

    Records are consumed completely before anything is returned, so an
    exception raised by the record iterator (e.g. MalformedRecord) leaves
    the caller with no graph at all.
    """
    store = GraphStore()
    registry = NodeRegistry(store)

    for from_id, to_id in records:
        src = registry.resolve(from_id)
        dst = registry.resolve(to_id)
        store.add_edge(src, dst)

    store.freeze()
    if logger:
        logger.info("Graph built: %d nodes, %d edges",
                    store.node_count(), store.edge_count())
    return registry, store
