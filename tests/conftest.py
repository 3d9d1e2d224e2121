import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from quote_data import build_catalog


@pytest.fixture
def life4():
    return build_catalog({"life": ["A", "B", "C", "D"]})


@pytest.fixture
def life1():
    return build_catalog({"life": ["A"]})


@pytest.fixture
def catalog_file(tmp_path):
    def _write(text):
        p = tmp_path / "quotes.json"
        p.write_text(text, encoding="utf-8")
        return p
    return _write
