import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from navigator import ContentTag, DirectionLabel, EffectKind, Facing


ROOT_ID = "root"

_TAG_NAMES = {
    "trash": ContentTag.REMOVABLE,
    "star": ContentTag.GOAL,
    "tree": ContentTag.GROWTH,
}


class LevelError(ValueError):
    pass


@dataclass
class Item:
    id: str
    tag: ContentTag
    node_id: str
    name: str
    reached: bool = False


@dataclass
class Node:
    id: str
    label: DirectionLabel | None = None
    parent: "Node | None" = field(default=None, repr=False)
    children: dict[DirectionLabel, "Node"] = field(default_factory=dict, repr=False)
    items: list[str] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1


@dataclass
class Effect:
    kind: EffectKind
    payload: Any
    duration: float


class LevelGraph:
    """Headless level tree used as the navigator's scene collaborator.

    Node handles are path strings (``root``, ``root/N``, ``root/N/E``) so they
    stay readable in logs and level files. Effects are recorded in
    ``self.effects`` instead of being rendered.
    """

    def __init__(self, name: str = "level"):
        self.name = name
        self.nodes: dict[str, Node] = {ROOT_ID: Node(ROOT_ID)}
        self.items: dict[str, Item] = {}
        self.effects: list[Effect] = []
        self._item_counter = 0

    @property
    def root(self) -> str:
        return ROOT_ID

    def node(self, node_id: str) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise LevelError(f"Unknown node '{node_id}'") from None

    def item(self, item_id: str) -> Item:
        try:
            return self.items[item_id]
        except KeyError:
            raise LevelError(f"Unknown item '{item_id}'") from None

    def add_node(self, parent_id: str, label: DirectionLabel) -> str:
        parent = self.node(parent_id)
        if not isinstance(label, DirectionLabel):
            raise LevelError(f"Children are labeled N, E or W, got {label!r}")
        if label in parent.children:
            raise LevelError(f"Node '{parent_id}' already has a {label.value} child")
        node = Node(f"{parent_id}/{label.value}", label=label, parent=parent)
        parent.children[label] = node
        self.nodes[node.id] = node
        return node.id

    def walk(self):
        stack = [self.nodes[ROOT_ID]]
        while stack:
            node = stack.pop()
            yield node
            for label in (DirectionLabel.WEST, DirectionLabel.EAST, DirectionLabel.NORTH):
                child = node.children.get(label)
                if child is not None:
                    stack.append(child)

    def has_child(self, node_id: str, label: DirectionLabel) -> str | None:
        child = self.node(node_id).children.get(label)
        return None if child is None else child.id

    def parent_of(self, node_id: str) -> str | None:
        parent = self.node(node_id).parent
        return None if parent is None else parent.id

    def label_from_parent(self, node_id: str) -> DirectionLabel | None:
        return self.node(node_id).label

    def contents_of(self, node_id: str) -> list[tuple[str, ContentTag]]:
        return [(item_id, self.items[item_id].tag) for item_id in self.node(node_id).items]

    def add_item(self, node_id: str, tag: ContentTag, name: str | None = None) -> str:
        node = self.node(node_id)
        self._item_counter += 1
        item_id = f"{tag.value.lower()}-{self._item_counter}"
        self.items[item_id] = Item(item_id, tag, node.id, name or tag.value)
        node.items.append(item_id)
        return item_id

    def remove_item(self, item_id: str) -> None:
        item = self.item(item_id)
        self.nodes[item.node_id].items.remove(item_id)
        del self.items[item_id]

    def mark_goal(self, item_id: str) -> None:
        item = self.item(item_id)
        if item.tag != ContentTag.GOAL:
            raise LevelError(f"Item '{item_id}' is a {item.tag.value}, not a goal")
        item.reached = True

    def emit_effect(self, kind: EffectKind, payload: Any, duration: float) -> None:
        self.effects.append(Effect(kind, payload, float(duration)))

    @property
    def goal_reached(self) -> bool:
        return any(item.reached for item in self.items.values() if item.tag == ContentTag.GOAL)

    def count(self, tag: ContentTag) -> int:
        return sum(1 for item in self.items.values() if item.tag == tag)


@dataclass
class Level:
    graph: LevelGraph
    start: str = ROOT_ID
    facing: Facing = Facing.NORTH

    @property
    def name(self) -> str:
        return self.graph.name


def _parse_tag(raw: Any, where: str) -> ContentTag:
    tag = _TAG_NAMES.get(str(raw).strip().lower())
    if tag is None:
        raise LevelError(f"{where}: unknown content '{raw}' (expected trash, star or tree)")
    return tag


def _build_node(graph: LevelGraph, node_id: str, spec: Any) -> None:
    if not isinstance(spec, dict):
        raise LevelError(f"{node_id}: node must be an object, got {type(spec).__name__}")
    contents = spec.get("contents", [])
    if not isinstance(contents, list):
        raise LevelError(f"{node_id}: contents must be a list, got {type(contents).__name__}")
    for raw in contents:
        graph.add_item(node_id, _parse_tag(raw, node_id))
    for key, child_spec in spec.items():
        if key == "contents":
            continue
        if key.upper() == "S":
            raise LevelError(f"{node_id}: south links do not exist, reach the parent through N links")
        try:
            label = DirectionLabel(key.upper())
        except ValueError:
            raise LevelError(f"{node_id}: unknown key '{key}'") from None
        _build_node(graph, graph.add_node(node_id, label), child_spec)


def build_level(data: dict) -> Level:
    if not isinstance(data, dict):
        raise LevelError("Level data must be an object")
    graph = LevelGraph(str(data.get("name", "level")))
    _build_node(graph, ROOT_ID, data.get("root", {}))

    start = str(data.get("start", ROOT_ID))
    graph.node(start)
    raw_facing = str(data.get("facing", "N")).strip().upper()
    try:
        facing = Facing(raw_facing)
    except ValueError:
        raise LevelError(f"Unknown facing '{raw_facing}'") from None
    return Level(graph, start, facing)


def load_level(path: str | Path) -> Level:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LevelError(f"{path}: invalid JSON ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise LevelError(f"{path}: not UTF-8 text ({exc.reason})") from exc
    level = build_level(data)
    print(f"[level] Loaded '{level.name}' from {path}: {len(level.graph.nodes)} nodes, {len(level.graph.items)} items")
    return level
