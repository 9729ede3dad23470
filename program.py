import re
from collections import deque
from enum import Enum
from typing import Iterable

from navigator import Cleaned, GraphNavigator, NothingToClean


class Command(Enum):
    FORWARD = "forward"
    TURN_LEFT = "left"
    TURN_RIGHT = "right"
    CLEAN = "clean"
    PLANT = "plant"


_ALIASES = {
    "f": Command.FORWARD,
    "forward": Command.FORWARD,
    "move": Command.FORWARD,
    "l": Command.TURN_LEFT,
    "left": Command.TURN_LEFT,
    "turnleft": Command.TURN_LEFT,
    "r": Command.TURN_RIGHT,
    "right": Command.TURN_RIGHT,
    "turnright": Command.TURN_RIGHT,
    "c": Command.CLEAN,
    "clean": Command.CLEAN,
    "p": Command.PLANT,
    "plant": Command.PLANT,
}


class ProgramError(ValueError):
    def __init__(self, token: str, position: int):
        super().__init__(f"Unknown command '{token}' at position {position}")
        self.token = token
        self.position = position


def parse_program(text: str) -> list[Command]:
    commands = []
    for position, token in enumerate(t for t in re.split(r"[\s,;]+", text) if t):
        command = _ALIASES.get(token.lower())
        if command is None:
            raise ProgramError(token, position)
        commands.append(command)
    return commands


def execute(navigator: GraphNavigator, command: Command):
    if command == Command.FORWARD:
        return navigator.move_one_unit()
    if command == Command.TURN_LEFT:
        return navigator.turn_left()
    if command == Command.TURN_RIGHT:
        return navigator.turn_right()
    if command == Command.CLEAN:
        return navigator.clean_node()
    return navigator.plant_node()


class ProgramRunner:
    """Feeds commands to a navigator one at a time.

    The host loop calls ``step`` once the previous command's effects have had
    ``movement_time`` to play out.
    """

    def __init__(self, navigator: GraphNavigator, stop_on_goal: bool = True):
        self.navigator = navigator
        self.stop_on_goal = stop_on_goal
        self.queue: deque[Command] = deque()
        self.results: list[tuple[Command, object]] = []
        self.goal_reached = False

    @property
    def running(self) -> bool:
        return bool(self.queue)

    def load(self, commands: Iterable[Command]) -> None:
        self.queue = deque(commands)
        self.results = []
        self.goal_reached = False

    def stop(self) -> None:
        self.queue.clear()

    def step(self):
        if not self.queue:
            return None
        command = self.queue.popleft()
        result = execute(self.navigator, command)
        self.results.append((command, result))
        if isinstance(result, (Cleaned, NothingToClean)) and result.goals:
            self.goal_reached = True
            if self.stop_on_goal:
                print(f"[program] Goal reached after {len(self.results)} command(s)")
                self.stop()
        return result


def run_program(navigator: GraphNavigator, commands: Iterable[Command], stop_on_goal: bool = True) -> list:
    runner = ProgramRunner(navigator, stop_on_goal=stop_on_goal)
    runner.load(commands)
    while runner.running:
        runner.step()
    return [result for _, result in runner.results]
