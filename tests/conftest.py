import matplotlib

matplotlib.use("Agg")

import pytest

from graph_store import build_graph


@pytest.fixture
def triangle_records():
    return [(1, 2), (1, 3), (2, 3)]


@pytest.fixture
def triangle(triangle_records):
    return build_graph(triangle_records)


@pytest.fixture
def write_csv(tmp_path):
    def _write(text, name="edges.csv"):
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write
