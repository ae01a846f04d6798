#!/usr/bin/env python3
"""
Orchestrator: read edges → build graph → export → degree analysis → report.
"""

import sys
import yaml
import logging
import argparse
from pathlib import Path

from graph_errors   import GraphPipelineError
from edge_source    import load_edge_list
from graph_store    import build_graph
from graph_export   import write_dot, export_graphml, visualize_graph
from graph_analysis import analyze_graph, log_report


REQUIRED = ["input_file", "output_dir", "dot_file"]

DEFAULTS = {
    "graphml":        None,
    "graph_image":    None,
    "skip_malformed": False,
    "jobs":           1,
    "report_file":    "graph_stats.json",
    "histogram":      True,
}


def setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    return logging.getLogger("pipeline")


def load_config(path, logger):
    path = Path(path)
    try:
        cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Cannot read config '%s': %s", path, e)
        sys.exit(1)
    if not isinstance(cfg, dict):
        logger.error("Config '%s' must be a mapping", path)
        sys.exit(1)
    missing = [k for k in REQUIRED if k not in cfg]
    if missing:
        logger.error("Config is missing keys: %s", missing)
        sys.exit(1)
    return {**DEFAULTS, **cfg}


def run(cfg, logger):
    out_dir = Path(cfg["output_dir"])
    out_dir.mkdir(parents=True, exist_ok=True)

    # 1) Ingestion: either the whole file parses or there is no graph
    pairs = load_edge_list(cfg["input_file"],
                           skip_malformed=bool(cfg["skip_malformed"]),
                           logger=logger)
    registry, store = build_graph(pairs, logger)

    # 2) Export
    write_dot(store, out_dir / cfg["dot_file"], logger)
    if cfg["graphml"]:
        export_graphml(store, out_dir / cfg["graphml"], logger)
    if cfg["graph_image"]:
        if store.node_count() == 0:
            logger.warning("Graph is empty, skipping image")
        else:
            visualize_graph(store, out_dir / cfg["graph_image"], logger)

    # 3) Degree analysis
    stats = analyze_graph(store, out_dir,
                          jobs=int(cfg["jobs"]),
                          histogram=bool(cfg["histogram"]),
                          report_name=cfg["report_file"],
                          logger=logger)
    log_report(stats, logger)
    logger.info("Graph stats: Nodes=%d Edges=%d Avg=%.4f",
                stats["num_nodes"], stats["num_edges"], stats["average_degree"])
    return stats


def main(argv=None):
    logger = setup_logging()

    p = argparse.ArgumentParser("Degree Pipeline")
    p.add_argument("--config", "-c", default="config.yaml", help="YAML config file")
    args = p.parse_args(argv)

    cfg = load_config(args.config, logger)
    try:
        run(cfg, logger)
    except GraphPipelineError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
