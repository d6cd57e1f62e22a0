import sys
from pathlib import Path

import pytest

# Ensure the repository root is in sys.path so 'yamlsax' and 'apps' import as packages
# when the tests run without an editable install.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def song_text() -> str:
    return (FIXTURES / "song.yaml").read_bytes().decode("utf-8")
