from direct.interval.IntervalGlobal import LerpHprInterval, LerpPosInterval
from panda3d.core import NodePath, Point3, Vec3

from level import LevelGraph
from navigator import ContentTag, DirectionLabel, EffectKind, Facing
from soundfx import load_cue_sounds, play_cue
from world import TILE_SIZE, create_checker_texture, make_item_visual, make_node_tile, make_player_token


LABEL_OFFSETS = {
    DirectionLabel.NORTH: Vec3(0, TILE_SIZE, 0),
    DirectionLabel.EAST: Vec3(TILE_SIZE, 0, 0),
    DirectionLabel.WEST: Vec3(-TILE_SIZE, 0, 0),
}

# Panda3D headings grow counter-clockwise when seen from above.
FACING_HEADINGS = {
    Facing.NORTH: 0.0,
    Facing.WEST: 90.0,
    Facing.SOUTH: 180.0,
    Facing.EAST: -90.0,
}


def node_name(label: DirectionLabel | None) -> str:
    return "LevelRoot" if label is None else f"Node{label.value}"


class PandaScene:
    """Renders a LevelGraph and plays the navigator's effects.

    Queries and content changes are forwarded to the graph so the logical
    level stays the single source of truth; this class only mirrors it in the
    scene graph. Pass ``app=None`` to build the scene without audio.
    """

    def __init__(self, graph: LevelGraph, parent: NodePath, app=None, sound_dir: str = "soundfx"):
        self.graph = graph
        self.root_np = parent.attachNewNode("LevelGraph")
        self.node_paths: dict[str, NodePath] = {}
        self.item_paths: dict[str, NodePath] = {}
        self.player_np: NodePath | None = None
        self.heading = 0.0
        self.move_ival = None
        self.turn_ival = None
        self.sounds = load_cue_sounds(app, sound_dir) if app is not None else {}
        self.tile_texture = create_checker_texture()
        self._build()

    def _build(self) -> None:
        for node in self.graph.walk():
            parent_np = self.root_np if node.parent is None else self.node_paths[node.parent.id]
            node_np = parent_np.attachNewNode(node_name(node.label))
            if node.label is not None:
                node_np.setPos(LABEL_OFFSETS[node.label])
            make_node_tile(node_np.getName(), self.tile_texture).reparentTo(node_np)
            self.node_paths[node.id] = node_np
            for item_id in node.items:
                self._attach_item(item_id)
        print(f"[scene] Built '{self.graph.name}': {len(self.node_paths)} nodes, {len(self.item_paths)} items")

    def _attach_item(self, item_id: str) -> NodePath:
        item = self.graph.item(item_id)
        item_np = make_item_visual(item.tag, item.name)
        item_np.reparentTo(self.node_paths[item.node_id])
        self.item_paths[item_id] = item_np
        return item_np

    def spawn_player(self, node_id: str, facing: Facing = Facing.NORTH) -> NodePath:
        if self.player_np is not None:
            self.player_np.removeNode()
        self.player_np = make_player_token()
        self.player_np.reparentTo(self.node_paths[node_id])
        self.heading = FACING_HEADINGS[facing]
        self.player_np.setH(self.heading)
        return self.player_np

    def has_child(self, node_id, label):
        return self.graph.has_child(node_id, label)

    def parent_of(self, node_id):
        return self.graph.parent_of(node_id)

    def label_from_parent(self, node_id):
        return self.graph.label_from_parent(node_id)

    def contents_of(self, node_id):
        return self.graph.contents_of(node_id)

    def remove_item(self, item_id: str) -> None:
        self.graph.remove_item(item_id)
        item_np = self.item_paths.pop(item_id, None)
        if item_np is not None:
            item_np.removeNode()

    def mark_goal(self, item_id: str) -> None:
        self.graph.mark_goal(item_id)
        item_np = self.item_paths.get(item_id)
        if item_np is None:
            return
        body = item_np.find("body")
        if not body.isEmpty():
            body.removeNode()
        burst = item_np.find("burst")
        if not burst.isEmpty():
            burst.show()

    def add_item(self, node_id: str, tag: ContentTag, name: str | None = None) -> str:
        item_id = self.graph.add_item(node_id, tag, name=name)
        self._attach_item(item_id)
        return item_id

    def emit_effect(self, kind: EffectKind, payload, duration: float) -> None:
        self.graph.emit_effect(kind, payload, duration)
        if kind == EffectKind.REPOSITION:
            self._reposition(payload[1], duration)
        elif kind == EffectKind.ROTATE:
            self._rotate(float(payload), duration)
        else:
            play_cue(self.sounds, kind)

    def _reposition(self, node_id: str, duration: float) -> None:
        if self.player_np is None:
            return
        if self.move_ival is not None:
            self.move_ival.finish()
        self.player_np.wrtReparentTo(self.node_paths[node_id])
        self.move_ival = LerpPosInterval(self.player_np, duration, Point3(0, 0, 0), name="player-move")
        self.move_ival.start()

    def _rotate(self, angle: float, duration: float) -> None:
        if self.player_np is None:
            return
        if self.turn_ival is not None:
            self.turn_ival.finish()
        self.heading -= angle
        self.turn_ival = LerpHprInterval(self.player_np, duration, Vec3(self.heading, 0, 0), name="player-turn")
        self.turn_ival.start()

    def finish_effects(self) -> None:
        for ival in (self.move_ival, self.turn_ival):
            if ival is not None:
                ival.finish()
        self.move_ival = None
        self.turn_ival = None

    def cleanup(self) -> None:
        self.finish_effects()
        self.root_np.removeNode()
        self.node_paths.clear()
        self.item_paths.clear()
        self.player_np = None
