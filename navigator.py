"""Movement of the robot token over a tree-shaped level graph.

The navigator owns only the logical state (current node and facing). Everything
visible or audible is delegated to a scene collaborator, which must provide::

    has_child(node, label) -> node | None
    parent_of(node) -> node | None
    label_from_parent(node) -> DirectionLabel | None
    contents_of(node) -> list[tuple[item_id, ContentTag]]
    remove_item(item_id)
    mark_goal(item_id)
    add_item(node, tag, name=None) -> item_id
    emit_effect(kind, payload, duration)

``level.LevelGraph`` is the plain in-memory implementation and
``scene.PandaScene`` the rendered one.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any

from config import NavigatorConfig


class Facing(Enum):
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"


class DirectionLabel(Enum):
    NORTH = "N"
    EAST = "E"
    WEST = "W"


class ContentTag(Enum):
    REMOVABLE = "Trash"
    GOAL = "Star"
    GROWTH = "Tree"


class EffectKind(Enum):
    REPOSITION = "reposition"
    ROTATE = "rotate"
    BLOCKED = "blocked"
    PICKUP = "pickup"
    ERROR = "error"
    LEVEL_COMPLETE = "level-complete"


_LEFT_OF = {
    Facing.NORTH: Facing.WEST,
    Facing.WEST: Facing.SOUTH,
    Facing.SOUTH: Facing.EAST,
    Facing.EAST: Facing.NORTH,
}
_RIGHT_OF = {after: before for before, after in _LEFT_OF.items()}


@dataclass(frozen=True)
class NavigatorState:
    node: Any
    facing: Facing


@dataclass(frozen=True)
class Moved:
    node: Any


@dataclass(frozen=True)
class Blocked:
    pass


@dataclass(frozen=True)
class Cleaned:
    count: int
    goals: int = 0


@dataclass(frozen=True)
class NothingToClean:
    goals: int = 0


@dataclass(frozen=True)
class Planted:
    item_id: Any


@dataclass(frozen=True)
class Rejected:
    pass


MoveResult = Moved | Blocked
CleanResult = Cleaned | NothingToClean
PlantResult = Planted | Rejected


class GraphNavigator:
    def __init__(
        self,
        scene,
        start,
        facing: Facing = Facing.NORTH,
        config: NavigatorConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.scene = scene
        # Raises for a handle the scene does not know.
        scene.parent_of(start)
        self.node = start
        self.facing = facing
        self.config = config or NavigatorConfig()
        self.rng = rng or random.Random(self.config.seed)

    @property
    def state(self) -> NavigatorState:
        return NavigatorState(self.node, self.facing)

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(f"[nav] {message}")

    def _sideways_target(self, toward: DirectionLabel, back_from: DirectionLabel):
        # A node hanging off the opposite side leads back to its parent first.
        if self.scene.label_from_parent(self.node) == back_from:
            return self.scene.parent_of(self.node)
        return self.scene.has_child(self.node, toward)

    def _south_target(self):
        scene = self.scene
        if scene.label_from_parent(self.node) != DirectionLabel.NORTH:
            return None
        parent = scene.parent_of(self.node)
        if parent is None or scene.label_from_parent(parent) != DirectionLabel.NORTH:
            return None
        return scene.parent_of(parent)

    def _target(self):
        if self.facing == Facing.NORTH:
            return self.scene.has_child(self.node, DirectionLabel.NORTH)
        if self.facing == Facing.EAST:
            return self._sideways_target(DirectionLabel.EAST, DirectionLabel.WEST)
        if self.facing == Facing.WEST:
            return self._sideways_target(DirectionLabel.WEST, DirectionLabel.EAST)
        return self._south_target()

    def move_one_unit(self) -> MoveResult:
        target = self._target()
        duration = self.config.movement_time
        if target is None:
            self._log(f"blocked at {self.node} facing {self.facing.value}")
            self.scene.emit_effect(EffectKind.BLOCKED, self.node, duration)
            return Blocked()
        old = self.node
        self.node = target
        self._log(f"moved {old} -> {target}")
        self.scene.emit_effect(EffectKind.REPOSITION, (old, target), duration)
        return Moved(target)

    def _turn(self, facing: Facing, angle: float) -> MoveResult:
        self.facing = facing
        self.scene.emit_effect(EffectKind.ROTATE, angle, self.config.movement_time)
        return self.move_one_unit()

    def turn_left(self) -> MoveResult:
        return self._turn(_LEFT_OF[self.facing], -90.0)

    def turn_right(self) -> MoveResult:
        return self._turn(_RIGHT_OF[self.facing], 90.0)

    def clean_node(self) -> CleanResult:
        removed = 0
        goals = 0
        for item_id, tag in list(self.scene.contents_of(self.node)):
            if tag == ContentTag.REMOVABLE:
                self.scene.remove_item(item_id)
                if removed == 0 or self.config.cue_each_pickup:
                    self.scene.emit_effect(EffectKind.PICKUP, item_id, 0.0)
                removed += 1
            elif tag == ContentTag.GOAL:
                self.scene.mark_goal(item_id)
                self.scene.emit_effect(EffectKind.LEVEL_COMPLETE, item_id, 0.0)
                goals += 1
        if removed == 0:
            self.scene.emit_effect(EffectKind.ERROR, self.node, 0.0)
            self._log(f"nothing to clean at {self.node}")
            return NothingToClean(goals)
        self._log(f"cleaned {removed} item(s) at {self.node}")
        return Cleaned(removed, goals)

    def plant_node(self) -> PlantResult:
        occupied = any(
            tag in (ContentTag.REMOVABLE, ContentTag.GROWTH)
            for _, tag in self.scene.contents_of(self.node)
        )
        catalog = self.config.plant_catalog
        if occupied or not catalog:
            self.scene.emit_effect(EffectKind.ERROR, self.node, 0.0)
            self._log(f"cannot plant at {self.node}")
            return Rejected()
        name = self.rng.choice(catalog)
        item_id = self.scene.add_item(self.node, ContentTag.GROWTH, name=name)
        self._log(f"planted {name} as {item_id}")
        return Planted(item_id)
