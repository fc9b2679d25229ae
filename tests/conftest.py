import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import titlepdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


class FixedWidthMeasurer:
    """Every character is half the font size wide."""

    def __init__(self) -> None:
        self.calls = 0

    def width_of(self, text: str, font_size: float) -> float:
        self.calls += 1
        return len(text) * font_size * 0.5


# Common test fixtures
@pytest.fixture
def measurer():
    """Return a deterministic fixed-width measurer."""
    return FixedWidthMeasurer()


@pytest.fixture
def long_content():
    """Return content with enough lines to need several pages."""
    return "\n".join(f"Line number {i}" for i in range(1, 101))
