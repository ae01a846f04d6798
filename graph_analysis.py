#!/usr/bin/env python3
"""
Degree statistics: saves graph_stats.json + degree_histogram.png.

"Degree" here is always out-degree: the number of edges a node originates.
A node that is only ever a target has degree 0.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import matplotlib.pyplot as plt
import networkx as nx

from graph_errors import EmptyGraph, InsufficientGraphSize


class DegreeAnalytics:
    """Read-only degree computations over a GraphStore."""

    def __init__(self, store, jobs: int = 1, logger=None):
        self.store = store.freeze()
        self.jobs = max(int(jobs), 1)
        self.logger = logger

    def out_degrees(self) -> dict:
        nodes = self.store.nodes()
        if self.jobs > 1 and len(nodes) > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as ex:
                degrees = list(ex.map(self.store.out_degree, nodes))
        else:
            degrees = [self.store.out_degree(n) for n in nodes]
        return dict(zip(nodes, degrees))

    def degree_distribution(self) -> dict:
        dist = {}
        for d in self.out_degrees().values():
            dist[d] = dist.get(d, 0) + 1
        return dist

    def average_degree(self) -> float:
        n = self.store.node_count()
        if n == 0:
            return 0.0
        return sum(self.out_degrees().values()) / n

    def degree_centrality(self, strict: bool = False) -> dict:
        n = self.store.node_count()
        if n <= 1:
            if strict:
                raise InsufficientGraphSize(n)
            if self.logger:
                self.logger.warning("Centrality skipped: %d node(s) in graph", n)
            return {}
        # counts parallel edges on the MultiDiGraph
        return nx.out_degree_centrality(self.store.to_networkx())

    def extremal_degree_nodes(self, strict: bool = False):
        """
        Return (max_node, min_node) or None for an empty graph.

        Single forward scan over nodes(); a later node only replaces the
        incumbent on a strictly better degree, so ties go to the node that
        was created first.
        """
        node_max = node_min = None
        deg_max = deg_min = None
        for node in self.store.nodes():
            d = self.store.out_degree(node)
            if node_max is None or d > deg_max:
                node_max, deg_max = node, d
            if node_min is None or d < deg_min:
                node_min, deg_min = node, d

        if node_max is None:
            if strict:
                raise EmptyGraph("extremal_degree_nodes")
            return None
        return node_max, node_min

    # same definition of "connections" as degree
    most_and_least_connections = extremal_degree_nodes


def _pair_labels(store, pair):
    if pair is None:
        return None
    return {"max": store.label(pair[0]), "min": store.label(pair[1])}


def analyze_graph(store, out_dir: Path = None, jobs: int = 1,
                  histogram: bool = True, report_name: str = "graph_stats.json",
                  logger=None) -> dict:
    da = DegreeAnalytics(store, jobs=jobs, logger=logger)

    dc = da.degree_centrality()
    stats = {
        "num_nodes": store.node_count(),
        "num_edges": store.edge_count(),
        "degree_distribution": dict(sorted(da.degree_distribution().items())),
        "average_degree": da.average_degree(),
        "degree_centrality": {store.label(n): c for n, c in dc.items()},
        "extreme_degree_nodes": _pair_labels(store, da.extremal_degree_nodes()),
        "most_least_connections": _pair_labels(store, da.most_and_least_connections()),
    }
    # sorted() is stable, so equal scores keep node order
    stats["top5_by_degree"] = [
        [store.label(n), c] for n, c in sorted(dc.items(), key=lambda x: -x[1])[:5]
    ]

    if out_dir is not None:
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / report_name).write_text(
            json.dumps(stats, indent=2), encoding="utf-8"
        )
        if histogram:
            plot_degree_histogram(da.out_degrees().values(),
                                  out_dir / "degree_histogram.png")

    return stats


def plot_degree_histogram(degrees, out_png: Path):
    degs = list(degrees)
    plt.figure(figsize=(6, 4))
    plt.hist(degs, bins=max(min(len(set(degs)), 20), 1),
             color="steelblue", edgecolor="black")
    plt.title("Out-degree distribution")
    plt.xlabel("Out-degree")
    plt.ylabel("Count")
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()


def log_report(stats: dict, logger):
    logger.info("Degree Distribution: %s", stats["degree_distribution"])
    logger.info("Average Degree: %s", stats["average_degree"])
    logger.info("Degree Centrality: %s", stats["degree_centrality"])

    ext = stats["extreme_degree_nodes"]
    if ext:
        logger.info("Node with the highest degree: %s", ext["max"])
        logger.info("Node with the lowest degree: %s", ext["min"])
    else:
        logger.info("No nodes found in the graph.")

    ml = stats["most_least_connections"]
    if ml:
        logger.info("Node with the most connections: %s", ml["max"])
        logger.info("Node with the least connections: %s", ml["min"])
    else:
        logger.info("No nodes found in the graph.")
