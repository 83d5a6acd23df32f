"""
Pytest configuration and fixtures for Sway Fade tests.

Provides an in-memory control transport and a sleep recorder so fade
sequences can be asserted command by command without a running Sway.
"""

import random
import re
import sys
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

import pytest

# Make the package importable without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sway_fade.errors import ErrorCode, TransportError
from sway_fade.models import FadeConfig, OutputSnapshot, WorkspaceSnapshot
from sway_fade.sequencer import FadeSequencer


WORKSPACE_PATTERN = re.compile(r'^\[workspace="\^(?P<name>.*)\$"\]')
FOCUSED_CRITERIA = "[workspace=__focused__]"
SWITCH_PATTERN = re.compile(r'^workspace "(?P<name>.*)"$')


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)


class FakeTransport:
    """Control transport recording every call into a shared event log.

    When ``populated`` is given, the fake behaves like Sway for workspace
    criteria: a command scoped to a workspace that has no windows (or does
    not exist) is answered with "No matching node".
    """

    def __init__(
        self,
        events: List[Tuple[str, object]],
        workspaces: Optional[List[WorkspaceSnapshot]] = None,
        outputs: Optional[List[OutputSnapshot]] = None,
        fail_on: Optional[Callable[[str], bool]] = None,
        populated: Optional[Set[str]] = None,
    ):
        self.events = events
        self.workspaces = workspaces or []
        self.outputs = outputs or []
        self.fail_on = fail_on
        self.populated = populated
        self.queries: List[str] = []
        self.focused = next((ws.name for ws in self.workspaces if ws.focused), None)

    @property
    def commands(self) -> List[str]:
        return [value for kind, value in self.events if kind == "command"]

    def _scoped_workspace(self, command: str) -> Optional[str]:
        if command.startswith(FOCUSED_CRITERIA):
            return self.focused
        match = WORKSPACE_PATTERN.match(command)
        if match:
            return _unescape(match.group("name"))
        return None

    async def run_command(self, command: str) -> None:
        self.events.append(("command", command))
        if self.fail_on is not None and self.fail_on(command):
            raise TransportError(command, "Invalid command")

        if self.populated is not None and command.startswith("[workspace="):
            if self._scoped_workspace(command) not in self.populated:
                raise TransportError(command, "No matching node.", code=ErrorCode.COMMAND_NO_MATCH)

        switch = SWITCH_PATTERN.match(command)
        if switch:
            self.focused = _unescape(switch.group("name"))

    async def get_workspaces(self) -> List[WorkspaceSnapshot]:
        self.queries.append("get_workspaces")
        return list(self.workspaces)

    async def get_outputs(self) -> List[OutputSnapshot]:
        self.queries.append("get_outputs")
        return list(self.outputs)


class SleepRecorder:
    """Stand-in for asyncio.sleep that logs delays instead of waiting."""

    def __init__(self, events: List[Tuple[str, object]]):
        self.events = events

    @property
    def delays(self) -> List[float]:
        return [value for kind, value in self.events if kind == "sleep"]

    async def __call__(self, delay: float) -> None:
        self.events.append(("sleep", delay))


@pytest.fixture
def events() -> List[Tuple[str, object]]:
    """Ordered log of commands and sleeps."""
    return []


@pytest.fixture
def transport(events) -> FakeTransport:
    """Fake transport with a single output "A" showing workspace "1"."""
    return FakeTransport(
        events,
        workspaces=[
            WorkspaceSnapshot(name="1", num=1, output="A", visible=True, focused=True),
            WorkspaceSnapshot(name="3", num=3, output="A", visible=False, focused=False),
        ],
        outputs=[OutputSnapshot(name="A", focused=True)],
    )


@pytest.fixture
def sleeper(events) -> SleepRecorder:
    return SleepRecorder(events)


@pytest.fixture
def make_sequencer(sleeper):
    """Factory building a FadeSequencer with deterministic tokens and no real sleeps."""

    def _make(transport, steps: int = 10, time: float = 0.1, seed: int = 42) -> FadeSequencer:
        return FadeSequencer(
            transport,
            FadeConfig(steps=steps, duration_seconds=time),
            sleep=sleeper,
            rng=random.Random(seed),
        )

    return _make
