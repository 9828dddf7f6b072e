import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so `narrator`, `calculator` and `backend` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from calculator import storage


@pytest.fixture
def tmp_db(monkeypatch, tmp_path: Path) -> Path:
    """Point the JSON store at a throwaway file."""
    data_dir = tmp_path / "data"
    data_file = data_dir / "kidcalc.json"
    monkeypatch.setattr(storage, "_DATA_DIR", str(data_dir))
    monkeypatch.setattr(storage, "_DATA_FILE", str(data_file))
    return data_file
