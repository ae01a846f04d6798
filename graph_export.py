#!/usr/bin/env python3
"""
graph_export.py

Exports a built relationship graph: DOT text (one entry per node, one per
stored edge, no edge labels), GraphML and an optional PNG drawing.
"""

import networkx as nx
import matplotlib.pyplot as plt
from pathlib import Path


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def render_dot(store) -> str:
    lines = ["digraph {"]
    for n in store.nodes():
        lines.append(f'    {n} [ label = "{_dot_escape(store.label(n))}" ]')
    # parallel edges are written once each
    for src, dst in store.edges():
        lines.append(f"    {src} -> {dst} [ ]")
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(store, out_dot, logger=None) -> Path:
    out_dot = Path(out_dot)
    out_dot.parent.mkdir(parents=True, exist_ok=True)
    out_dot.write_text(render_dot(store), encoding="utf-8")
    if logger:
        logger.info("DOT written: %s", out_dot)
    return out_dot


def export_graphml(store, out_graphml, logger=None) -> Path:
    out_graphml = Path(out_graphml)
    out_graphml.parent.mkdir(parents=True, exist_ok=True)
    nx.write_graphml(store.to_networkx(), str(out_graphml))
    if logger:
        logger.info("GraphML written: %s", out_graphml)
    return out_graphml


def visualize_graph(store, out_png, logger=None) -> Path:
    G = store.to_networkx()
    plt.figure(figsize=(8, 6))
    pos = nx.spring_layout(G, seed=42)
    labels = {n: store.label(n) for n in G.nodes}

    nx.draw_networkx_nodes(G, pos, node_size=60, node_color="skyblue")
    nx.draw_networkx_edges(G, pos, arrowsize=6, edge_color="gray")
    if G.number_of_nodes() <= 50:
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=6)
    plt.axis("off")

    out_png = Path(out_png)
    out_png.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_png, dpi=150)
    plt.close()
    if logger:
        logger.info("Graph image written: %s", out_png)
    return out_png
