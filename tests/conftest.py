"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`conquest` package (e.g., `from conquest.api.app import create_app`) without
requiring an editable install in CI.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def store(tmp_path):
    from conquest.repository import JsonDocumentStore

    return JsonDocumentStore(tmp_path / "store")
