import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_merge.config import GMConfig  # noqa: E402
from gedcom_merge.loader import read_text  # noqa: E402
from gedcom_merge.utils import mock_file_path  # noqa: E402


@pytest.fixture
def config() -> GMConfig:
    """Built-in defaults, independent of config/gedcom_merge.yml."""
    return GMConfig({})


@pytest.fixture
def master_text() -> str:
    return read_text(mock_file_path("master_small.ged"))


@pytest.fixture
def incoming_text() -> str:
    return read_text(mock_file_path("incoming_family.ged"))


@pytest.fixture
def master_file(tmp_path: Path, master_text: str) -> Path:
    path = tmp_path / "family.ged"
    path.write_text(master_text, encoding="utf-8")
    return path
