import sys
from pathlib import Path

import pytest

# Ensure repo root is on sys.path so tests can import the package directly
root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from relped.paths import SequentialNames  # noqa: E402


@pytest.fixture
def names():
    """Deterministic unknown-individual names: U1, U2, ..."""
    return SequentialNames("U")


@pytest.fixture
def write_csv(tmp_path):
    def _write(filename, text):
        p = tmp_path / filename
        p.write_text(text, encoding="utf-8")
        return p
    return _write
