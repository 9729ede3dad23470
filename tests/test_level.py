import json
from pathlib import Path

import pytest

from level import LevelError, LevelGraph, build_level, load_level
from navigator import ContentTag, DirectionLabel, EffectKind, Facing


def test_graph_links_children_and_parents(cross_graph):
    assert cross_graph.has_child("root", DirectionLabel.NORTH) == "root/N"
    assert cross_graph.has_child("root/E", DirectionLabel.NORTH) is None
    assert cross_graph.parent_of("root/N/N") == "root/N"
    assert cross_graph.parent_of("root") is None
    assert cross_graph.label_from_parent("root/W") == DirectionLabel.WEST
    assert cross_graph.label_from_parent("root") is None
    assert cross_graph.node("root/N/N").depth == 2


def test_walk_visits_parents_before_children(cross_graph):
    order = [node.id for node in cross_graph.walk()]
    assert order[0] == "root"
    assert sorted(order) == sorted(cross_graph.nodes)
    assert order.index("root/N") < order.index("root/N/N")


def test_duplicate_label_is_rejected():
    graph = LevelGraph()
    graph.add_node("root", DirectionLabel.EAST)
    with pytest.raises(LevelError, match="already has a E child"):
        graph.add_node("root", DirectionLabel.EAST)


def test_unknown_handles_raise():
    graph = LevelGraph()
    with pytest.raises(LevelError):
        graph.has_child("root/N", DirectionLabel.NORTH)
    with pytest.raises(LevelError):
        graph.remove_item("trash-99")


def test_items_add_remove_and_goal():
    graph = LevelGraph()
    trash = graph.add_item("root", ContentTag.REMOVABLE)
    star = graph.add_item("root", ContentTag.GOAL)
    assert graph.contents_of("root") == [(trash, ContentTag.REMOVABLE), (star, ContentTag.GOAL)]

    graph.remove_item(trash)
    assert graph.contents_of("root") == [(star, ContentTag.GOAL)]
    assert not graph.goal_reached
    graph.mark_goal(star)
    assert graph.goal_reached

    tree = graph.add_item("root", ContentTag.GROWTH, name="tree_pine")
    with pytest.raises(LevelError, match="not a goal"):
        graph.mark_goal(tree)


def test_effects_are_recorded():
    graph = LevelGraph()
    graph.emit_effect(EffectKind.BLOCKED, "root", 1)
    assert graph.effects[0].kind == EffectKind.BLOCKED
    assert graph.effects[0].duration == 1.0


def test_build_level_from_nested_data():
    level = build_level({
        "name": "tiny",
        "start": "root/N",
        "facing": "e",
        "root": {"N": {"contents": ["Trash", "star"], "E": {}}},
    })
    assert level.name == "tiny"
    assert level.start == "root/N"
    assert level.facing == Facing.EAST
    graph = level.graph
    assert set(graph.nodes) == {"root", "root/N", "root/N/E"}
    assert [tag for _, tag in graph.contents_of("root/N")] == [ContentTag.REMOVABLE, ContentTag.GOAL]


@pytest.mark.parametrize(
    "data, message",
    [
        ({"root": {"S": {}}}, "south links"),
        ({"root": {"X": {}}}, "unknown key"),
        ({"root": {"contents": ["rock"]}}, "unknown content"),
        ({"root": {"N": []}}, "must be an object"),
        ({"root": {"contents": None}}, "contents must be a list"),
        ({"root": {"contents": "trash"}}, "contents must be a list"),
        ({"start": "root/W"}, "Unknown node"),
        ({"facing": "up"}, "Unknown facing"),
    ],
)
def test_build_level_rejects_bad_data(data, message):
    with pytest.raises(LevelError, match=message):
        build_level(data)


def test_load_level_reads_json(tmp_path: Path):
    path = tmp_path / "level.json"
    path.write_text(json.dumps({"name": "file", "root": {"N": {"contents": ["star"]}}}))
    level = load_level(path)
    assert level.name == "file"
    assert level.graph.count(ContentTag.GOAL) == 1


def test_load_level_reports_bad_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(LevelError, match="invalid JSON"):
        load_level(path)


def test_demo_level_loads(demo_level_path):
    level = load_level(demo_level_path)
    assert level.graph.count(ContentTag.REMOVABLE) == 3
    assert level.graph.count(ContentTag.GOAL) == 1


def test_load_level_reports_non_utf8_bytes(tmp_path: Path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'{"name": "\xff"}')
    with pytest.raises(LevelError, match="not UTF-8"):
        load_level(path)
