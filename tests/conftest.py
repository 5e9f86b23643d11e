import matplotlib

matplotlib.use("Agg")

import textwrap
from datetime import datetime

import pytest


@pytest.fixture
def as_of():
    return datetime(2024, 1, 1)


@pytest.fixture
def write_csv(tmp_path):
    def _write(content, name="assignments.csv"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return str(path)

    return _write
