"""
Pytest configuration and shared fixtures for Paint tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.shape_collection import ShapeCollection
from models.style import ShapeStyle
from services.canvas_controller import CanvasController
from services.settings_manager import SettingsManager, reset_settings_manager


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="paint_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# ============== Model Fixtures ==============

@pytest.fixture
def default_style() -> ShapeStyle:
    """The style new shapes get when nothing is configured."""
    return ShapeStyle()


@pytest.fixture
def red_style() -> ShapeStyle:
    """A filled, thick-stroked style distinct from the default."""
    return ShapeStyle(outline_color="#ff0000", fill_color="#00ff00", filled=True, stroke_width=6)


@pytest.fixture
def collection() -> ShapeCollection:
    """Create an empty shape collection."""
    return ShapeCollection()


@pytest.fixture
def mixed_collection(red_style: ShapeStyle) -> ShapeCollection:
    """One shape of each kind, bottom to top: circle, rectangle, path."""
    shapes = ShapeCollection()
    shapes.add_circle(100, 100, 50)
    shapes.add_rectangle(10, 20, 30, 5, red_style)
    shapes.add_path([(0, 0), (50, 0), (50, 50), (0, 50)])
    return shapes


@pytest.fixture
def overlapping_collection() -> ShapeCollection:
    """Three shapes all covering (50, 50); z-order A, B, C with C on top."""
    shapes = ShapeCollection()
    shapes.add_rectangle(0, 0, 100, 100)               # A
    shapes.add_circle(50, 50, 30)                       # B
    shapes.add_path([(40, 40), (60, 40), (60, 60), (40, 60)])  # C
    return shapes


# ============== Service Fixtures ==============

@pytest.fixture
def controller(collection: ShapeCollection) -> CanvasController:
    """Controller over an empty collection."""
    return CanvasController(collection)


@pytest.fixture
def settings_manager(temp_dir: Path) -> Generator[SettingsManager, None, None]:
    """Settings manager writing to a temporary file."""
    reset_settings_manager()
    yield SettingsManager(str(temp_dir / "config" / "settings.json"))
    reset_settings_manager()


# ============== Helper Functions ==============

def sample_points(box, steps: int = 8):
    """Grid of points covering a bounding box plus a margin around it."""
    x, y, w, h = box
    margin_x = max(w * 0.25, 1.0)
    margin_y = max(h * 0.25, 1.0)
    points = []
    for i in range(steps + 1):
        for j in range(steps + 1):
            px = x - margin_x + (w + 2 * margin_x) * i / steps
            py = y - margin_y + (h + 2 * margin_y) * j / steps
            points.append((px, py))
    return points


def assert_box_close(actual, expected, tol: float = 1e-6):
    """Assert two bounding boxes match within a tolerance."""
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tol, f"{tuple(actual)} != {tuple(expected)}"
