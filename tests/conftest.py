import sys
from pathlib import Path

import pytest

# Make the top-level packages importable however pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """A local, readable stand-in for an audio container."""
    path = tmp_path / "Live at Somewhere.flac"
    path.write_bytes(b"fake")
    return path
