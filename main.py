import argparse
import os
import sys
from pathlib import Path

from direct.showbase.ShowBase import ShowBase
from panda3d.core import AmbientLight, DirectionalLight, loadPrcFileData

from config import NavigatorConfig, config_from_env, env_flag
from level import Level, LevelError, load_level
from navigator import Blocked, Cleaned, GraphNavigator, Moved, NothingToClean, Planted, Rejected
from program import Command, ProgramError, ProgramRunner, execute, parse_program, run_program
from scene import PandaScene


LEVEL_DIRS = (
    Path(__file__).resolve().parent / "levels",
    Path(sys.prefix) / "share" / "treebot" / "levels",
)

COMMAND_KEYS = {
    "arrow_up": Command.FORWARD,
    "arrow_left": Command.TURN_LEFT,
    "arrow_right": Command.TURN_RIGHT,
    "c": Command.CLEAN,
    "p": Command.PLANT,
}


def default_level_path(name: str = "demo.json") -> Path:
    for directory in LEVEL_DIRS:
        candidate = directory / name
        if candidate.exists():
            return candidate
    return LEVEL_DIRS[0] / name


def _configure_display_prc() -> None:
    vsync_on = env_flag(os.environ, "TREEBOT_VSYNC", True)
    fullscreen_on = env_flag(os.environ, "TREEBOT_FULLSCREEN", False)
    win_size = os.getenv("TREEBOT_WIN_SIZE", "1280x720").lower().split("x")
    try:
        win_w, win_h = (max(320, int(v)) for v in win_size)
    except ValueError:
        win_w, win_h = 1280, 720
    loadPrcFileData("", "window-title TreeBot")
    loadPrcFileData("", f"win-size {win_w} {win_h}")
    loadPrcFileData("", f"fullscreen {1 if fullscreen_on else 0}")
    loadPrcFileData("", f"sync-video {1 if vsync_on else 0}")
    loadPrcFileData("", "clock-mode limited")
    loadPrcFileData("", f"clock-frame-rate {60 if vsync_on else 120}")


def format_result(result) -> str:
    if isinstance(result, Moved):
        return f"moved to {result.node}"
    if isinstance(result, Blocked):
        return "blocked"
    if isinstance(result, Cleaned):
        suffix = f", reached {result.goals} star(s)" if result.goals else ""
        return f"cleaned {result.count} item(s){suffix}"
    if isinstance(result, NothingToClean):
        suffix = f", reached {result.goals} star(s)" if result.goals else ""
        return f"nothing to clean{suffix}"
    if isinstance(result, Planted):
        return f"planted {result.item_id}"
    if isinstance(result, Rejected):
        return "cannot plant here"
    return repr(result)


class TreeBotApp(ShowBase):
    def __init__(self, level: Level, commands: list[Command] | None = None, nav_config: NavigatorConfig | None = None):
        super().__init__()
        self.disableMouse()
        self.nav_config = nav_config or config_from_env()
        self.level = level

        self.scene = PandaScene(level.graph, self.render, app=self)
        self.scene.spawn_player(level.start, level.facing)
        self.navigator = GraphNavigator(self.scene, level.start, level.facing, config=self.nav_config)
        self.runner = ProgramRunner(self.navigator)
        self._setup_lights()
        self._setup_camera()

        for key, command in COMMAND_KEYS.items():
            self.accept(key, self._on_command_key, [command])
        self.accept("escape", self._on_escape_pressed)

        if commands:
            self.runner.load(commands)
            print(f"[program] Running {len(commands)} command(s)")
            self.taskMgr.doMethodLater(self.nav_config.movement_time, self._step_program, "program-step")

    def _setup_lights(self) -> None:
        ambient = AmbientLight("ambient")
        ambient.setColor((0.45, 0.45, 0.5, 1.0))
        self.render.setLight(self.render.attachNewNode(ambient))
        sun = DirectionalLight("sun")
        sun.setColor((0.8, 0.78, 0.7, 1.0))
        sun_np = self.render.attachNewNode(sun)
        sun_np.setHpr(-30, -60, 0)
        self.render.setLight(sun_np)

    def _setup_camera(self) -> None:
        bounds = self.scene.root_np.getTightBounds()
        if bounds:
            low, high = bounds
            extent = high - low
            center = low + extent * 0.5
            span = max(extent.length(), 4.0)
        else:
            center, span = self.scene.root_np.getPos(), 4.0
        self.camera.setPos(center.x, center.y - span * 0.9, span * 0.9)
        self.camera.lookAt(center)

    def _report(self, command: Command, result) -> None:
        print(f"[program] {command.value}: {format_result(result)}")
        if self.level.graph.goal_reached:
            print(f"[level] '{self.level.name}' complete")

    def _on_command_key(self, command: Command) -> None:
        if self.runner.running:
            print("[program] Busy, ignoring key input while a program runs")
            return
        self._report(command, execute(self.navigator, command))

    def _step_program(self, task):
        if not self.runner.running:
            return task.done
        result = self.runner.step()
        command, _ = self.runner.results[-1]
        self._report(command, result)
        if not self.runner.running:
            return task.done
        task.delayTime = self.nav_config.movement_time
        return task.again

    def _on_escape_pressed(self) -> None:
        try:
            self.userExit()
        except Exception:
            self.destroy()


def run_headless(level: Level, commands: list[Command], nav_config: NavigatorConfig | None = None) -> list:
    navigator = GraphNavigator(level.graph, level.start, level.facing, config=nav_config or config_from_env())
    results = run_program(navigator, commands)
    for command, result in zip(commands, results):
        print(f"[program] {command.value}: {format_result(result)}")
    graph = level.graph
    status = "complete" if graph.goal_reached else "incomplete"
    print(f"[level] '{level.name}' {status}: ended at {navigator.node} facing {navigator.facing.value}, {len(results)} command(s) run")
    return results


def _read_program(args) -> list[Command]:
    text = args.program or ""
    if args.program_file:
        text = Path(args.program_file).read_text(encoding="utf-8")
    return parse_program(text)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Drive the TreeBot robot across a level tree.")
    parser.add_argument("--level", default=str(default_level_path()), help="Level JSON file")
    parser.add_argument("--program", help="Commands, e.g. 'forward right clean plant'")
    parser.add_argument("--program-file", help="File holding the program text")
    parser.add_argument("--headless", action="store_true", help="Run the program without opening a window")
    args = parser.parse_args(argv)

    try:
        level = load_level(args.level)
        commands = _read_program(args)
    except (LevelError, ProgramError, OSError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 2

    if args.headless:
        run_headless(level, commands)
        return 0

    _configure_display_prc()
    app = TreeBotApp(level, commands)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
