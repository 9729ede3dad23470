import os
from dataclasses import dataclass, field
from typing import Mapping


DEFAULT_PLANT_CATALOG = ("tree_oak", "tree_pine", "tree_palm")


@dataclass
class NavigatorConfig:
    movement_time: float = 0.5
    plant_catalog: tuple[str, ...] = field(default=DEFAULT_PLANT_CATALOG)
    cue_each_pickup: bool = True
    seed: int | None = None
    verbose: bool = False


def env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        print(f"[config] Ignoring {name}={raw!r}: not a number")
        return default


def _env_int(environ: Mapping[str, str], name: str) -> int | None:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        print(f"[config] Ignoring {name}={raw!r}: not an integer")
        return None


def config_from_env(environ: Mapping[str, str] | None = None) -> NavigatorConfig:
    env = os.environ if environ is None else environ
    catalog = DEFAULT_PLANT_CATALOG
    raw_catalog = env.get("TREEBOT_PLANT_CATALOG")
    if raw_catalog:
        names = tuple(part.strip() for part in raw_catalog.split(",") if part.strip())
        if names:
            catalog = names
    return NavigatorConfig(
        movement_time=_env_float(env, "TREEBOT_MOVEMENT_TIME", 0.5),
        plant_catalog=catalog,
        cue_each_pickup=env_flag(env, "TREEBOT_CUE_EACH_PICKUP", True),
        seed=_env_int(env, "TREEBOT_SEED"),
        verbose=env_flag(env, "TREEBOT_VERBOSE", False),
    )
