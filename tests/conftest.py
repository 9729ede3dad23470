import sys
from pathlib import Path

import pytest


# Modules live at the repo root, so put it on the path for `import navigator` etc.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config import NavigatorConfig  # noqa: E402
from level import LevelGraph  # noqa: E402
from navigator import DirectionLabel  # noqa: E402


@pytest.fixture
def demo_level_path() -> Path:
    return _ROOT / "levels" / "demo.json"


@pytest.fixture
def config() -> NavigatorConfig:
    return NavigatorConfig(movement_time=0.5, plant_catalog=("tree_oak",), seed=7)


@pytest.fixture
def cross_graph() -> LevelGraph:
    """root with N, E and W children, plus a second N step above root/N."""
    graph = LevelGraph("cross")
    north = graph.add_node("root", DirectionLabel.NORTH)
    graph.add_node("root", DirectionLabel.EAST)
    graph.add_node("root", DirectionLabel.WEST)
    graph.add_node(north, DirectionLabel.NORTH)
    return graph
