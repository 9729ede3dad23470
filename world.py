from panda3d.core import CardMaker, NodePath, PNMImage, Texture, TransparencyAttrib

from navigator import ContentTag


TILE_SIZE = 1.6

ITEM_COLORS = {
    ContentTag.REMOVABLE: (0.46, 0.38, 0.22, 1.0),
    ContentTag.GOAL: (1.0, 0.86, 0.2, 1.0),
    ContentTag.GROWTH: (0.22, 0.7, 0.3, 1.0),
}


def create_checker_texture(
    size: int = 64,
    cells: int = 4,
    color_a: tuple[float, float, float, float] = (0.32, 0.34, 0.38, 1.0),
    color_b: tuple[float, float, float, float] = (0.24, 0.26, 0.3, 1.0),
) -> Texture:
    image = PNMImage(size, size, 4)
    step = max(1, size // cells)
    for y in range(size):
        for x in range(size):
            c = color_a if ((x // step) + (y // step)) % 2 == 0 else color_b
            image.setXelA(x, y, c[0], c[1], c[2], c[3])

    tex = Texture("tile-checker")
    tex.load(image)
    tex.setMinfilter(Texture.FTLinearMipmapLinear)
    tex.setMagfilter(Texture.FTLinear)
    return tex


def _card(name: str, width: float, height: float, color) -> NodePath:
    cm = CardMaker(name)
    cm.setFrame(-width * 0.5, width * 0.5, 0.0, height)
    card = NodePath(cm.generate())
    card.setColor(*color)
    card.setTwoSided(True)
    return card


def make_node_tile(name: str, texture: Texture | None = None) -> NodePath:
    cm = CardMaker(f"{name}-tile")
    half = TILE_SIZE * 0.45
    cm.setFrame(-half, half, -half, half)
    tile = NodePath(cm.generate())
    tile.setP(-90)
    tile.setZ(-0.01)
    if texture is not None:
        tile.setTexture(texture, 1)
    return tile


def make_item_visual(tag: ContentTag, name: str) -> NodePath:
    holder = NodePath(name)
    holder.setTag("kind", tag.value)
    color = ITEM_COLORS[tag]
    if tag == ContentTag.GOAL:
        body = _card("body", 0.5, 0.5, color)
        body.reparentTo(holder)
        body.setBillboardPointEye()
        burst = _card("burst", 1.1, 1.1, (1.0, 1.0, 0.6, 0.8))
        burst.setTransparency(TransparencyAttrib.MAlpha)
        burst.setBillboardPointEye()
        burst.reparentTo(holder)
        burst.hide()
    elif tag == ContentTag.GROWTH:
        trunk = _card("trunk", 0.12, 0.5, (0.4, 0.26, 0.14, 1.0))
        trunk.reparentTo(holder)
        crown = _card("crown", 0.6, 0.6, color)
        crown.setZ(0.45)
        crown.reparentTo(holder)
        trunk.copyTo(holder).setH(90)
        crown.copyTo(holder).setH(90)
    else:
        body = _card("body", 0.3, 0.22, color)
        body.setBillboardPointEye()
        body.reparentTo(holder)
    return holder


def make_player_token(name: str = "player") -> NodePath:
    token = NodePath(name)
    body = _card("body", 0.5, 0.7, (0.75, 0.82, 0.95, 1.0))
    body.reparentTo(token)
    nose = _card("nose", 0.16, 0.16, (1.0, 0.35, 0.3, 1.0))
    nose.setPos(0, 0.28, 0.5)
    nose.reparentTo(token)
    return token
