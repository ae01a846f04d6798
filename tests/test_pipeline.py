"""End-to-end runs of the pipeline CLI."""

import json
import logging

import pytest
import yaml

import pipeline


def _write_config(tmp_path, **overrides):
    cfg = {
        "input_file": str(tmp_path / "edges.csv"),
        "output_dir": str(tmp_path / "out"),
        "dot_file": "graph.dot",
    }
    cfg.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


@pytest.fixture
def edges_csv(tmp_path):
    p = tmp_path / "edges.csv"
    p.write_text("FromNodeId,ToNodeId\n1,2\n1,3\n2,3\n", encoding="utf-8")
    return p


def test_main_writes_outputs(tmp_path, edges_csv):
    cfg = _write_config(tmp_path, graphml="graph.graphml")
    pipeline.main(["--config", str(cfg)])

    out = tmp_path / "out"
    assert (out / "graph.dot").read_text(encoding="utf-8").startswith("digraph {")
    assert (out / "graph.graphml").exists()
    stats = json.loads((out / "graph_stats.json").read_text(encoding="utf-8"))
    assert stats["average_degree"] == 1.0
    assert stats["extreme_degree_nodes"] == {"max": "Node 1", "min": "Node 3"}


def test_run_returns_report(tmp_path, edges_csv):
    logger = logging.getLogger("test.pipeline")
    cfg = pipeline.load_config(_write_config(tmp_path, histogram=False, jobs=2), logger)

    stats = pipeline.run(cfg, logger)
    assert stats["degree_distribution"] == {0: 1, 1: 1, 2: 1}
    assert not (tmp_path / "out" / "degree_histogram.png").exists()


def test_two_runs_produce_identical_reports(tmp_path, edges_csv):
    logger = logging.getLogger("test.pipeline")
    a = pipeline.run(pipeline.load_config(_write_config(tmp_path, output_dir=str(tmp_path / "a")), logger), logger)
    b = pipeline.run(pipeline.load_config(_write_config(tmp_path, output_dir=str(tmp_path / "b")), logger), logger)
    assert a == b


def test_malformed_input_exits_with_error(tmp_path, caplog):
    (tmp_path / "edges.csv").write_text("a,b\n1,2\n1,x\n", encoding="utf-8")
    cfg = _write_config(tmp_path)

    with pytest.raises(SystemExit) as exc:
        pipeline.main(["-c", str(cfg)])
    assert exc.value.code == 1
    assert "Malformed record at line 3" in caplog.text
    assert not (tmp_path / "out" / "graph.dot").exists()


def test_missing_input_exits_with_error(tmp_path):
    cfg = _write_config(tmp_path)
    with pytest.raises(SystemExit) as exc:
        pipeline.main(["-c", str(cfg)])
    assert exc.value.code == 1


def test_missing_config_keys_exit(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("input_file: edges.csv\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        pipeline.load_config(path, logging.getLogger("test.pipeline"))


def test_defaults_are_filled(tmp_path):
    cfg = pipeline.load_config(_write_config(tmp_path), logging.getLogger("test.pipeline"))
    assert cfg["jobs"] == 1
    assert cfg["skip_malformed"] is False
    assert cfg["graphml"] is None


def test_over_long_identifier_exits_with_error(tmp_path, caplog):
    (tmp_path / "edges.csv").write_text("a,b\n" + "9" * 5000 + ",1\n", encoding="utf-8")
    cfg = _write_config(tmp_path)

    with pytest.raises(SystemExit) as exc:
        pipeline.main(["-c", str(cfg)])
    assert exc.value.code == 1
    assert "Malformed record at line 2" in caplog.text
