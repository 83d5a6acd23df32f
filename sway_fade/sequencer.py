"""
Fade sequencer.

Issues the ordered, timed Sway command sequence for one fade operation:

- fade in: ramp the window marked ``fade`` from its current opacity to 1
- fade out: ramp the window marked ``quit`` down, then kill it
- workspace switch: fade the current workspace out, switch, fade the
  destination in

Every sequence ends with an absolute command (``opacity 1`` or ``kill``) so
rounding in the additive steps never leaves an entity part-transparent.
Any transport error aborts the sequence; nothing is rolled back. The one
exception is a workspace opacity command whose criteria match no window
(an empty or not yet created workspace), which Sway reports as a failed
reply.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from . import commands
from .models import (
    FADE_IN_MARK,
    FADE_OUT_MARK,
    FOCUSED_WORKSPACE,
    FadeConfig,
    FadeIn,
    FadeOut,
    Operation,
    SwitchPlan,
    SwitchWorkspace,
)
from .errors import ErrorCode, TransportError
from .resolver import resolve_from_transport
from .transport import ControlTransport

logger = logging.getLogger(__name__)

# Mark tokens are drawn from [0, MARK_TOKEN_RANGE)
MARK_TOKEN_RANGE = 9999

Sleep = Callable[[float], Awaitable[None]]


class FadeSequencer:
    """Drives one fade operation against a control transport."""

    def __init__(
        self,
        transport: ControlTransport,
        config: Optional[FadeConfig] = None,
        sleep: Sleep = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize fade sequencer.

        Args:
            transport: Connected control transport
            config: Fade timing (defaults to 10 steps over 0.1s)
            sleep: Coroutine used for timed suspensions
            rng: Random source for mark tokens
        """
        self.transport = transport
        self.config = config or FadeConfig()
        self.sleep = sleep
        self.rng = rng or random.Random()

    def new_mark_token(self) -> int:
        return self.rng.randrange(MARK_TOKEN_RANGE)

    async def run(self, operation: Operation) -> None:
        """Execute ``operation``."""
        if isinstance(operation, FadeIn):
            await self.fade_in()
        elif isinstance(operation, FadeOut):
            await self.fade_out()
        elif isinstance(operation, SwitchWorkspace):
            await self.switch_workspace(operation.target_name)
        else:
            raise TypeError(f"Unknown fade operation: {operation!r}")

    async def _run_workspace_command(self, command: str) -> None:
        """Run a workspace-scoped command; a workspace with no windows is not an error."""
        try:
            await self.transport.run_command(command)
        except TransportError as e:
            if e.code != ErrorCode.COMMAND_NO_MATCH:
                raise
            logger.debug("No windows matched: %s", command)

    async def _claim(self, sentinel: str) -> int:
        token = self.new_mark_token()
        await self.transport.run_command(commands.claim_mark(sentinel, token))
        return token

    async def _ramp_window(self, token: int, step: Callable[[str, float], str]) -> None:
        criteria = commands.mark_criteria(token)
        for _ in range(self.config.steps):
            await self.sleep(self.config.per_step_delay)
            await self.transport.run_command(step(criteria, self.config.stride))

    async def fade_in(self) -> None:
        """Fade in the window carrying the ``fade`` mark."""
        token = await self._claim(FADE_IN_MARK)
        logger.info("Fading in window (mark %d) over %d steps", token, self.config.steps)

        await self._ramp_window(token, commands.opacity_plus)

        await self.transport.run_command(
            commands.opacity_set(commands.mark_criteria(token), 1)
        )
        await self.transport.run_command(commands.unmark(token))

    async def fade_out(self) -> None:
        """Fade out and kill the window carrying the ``quit`` mark."""
        token = await self._claim(FADE_OUT_MARK)
        logger.info("Fading out window (mark %d) over %d steps", token, self.config.steps)

        await self._ramp_window(token, commands.opacity_minus)

        # The window is destroyed, so its mark needs no cleanup
        await self.transport.run_command(commands.kill(token))

    async def switch_workspace(self, name: str) -> SwitchPlan:
        """
        Switch to workspace ``name`` with a crossfade.

        Returns:
            The resolved SwitchPlan

        Raises:
            ResolutionError: If no output or current workspace exists
            TransportError: If any IPC call fails, other than a workspace
                opacity command matching no windows
        """
        plan = await resolve_from_transport(self.transport, name)

        if plan.skip:
            # Already visible: switching shows no transition, so don't fade
            logger.info("Workspace %s already visible, switching without fade", name)
            await self.transport.run_command(commands.switch_workspace(name))
            return plan

        logger.info(
            "Crossfading workspace %s -> %s on %s", plan.current.name, name, plan.output
        )

        stride = self.config.stride
        delay = self.config.crossfade_delay
        current = commands.workspace_criteria(plan.current.name)
        focused = commands.workspace_criteria(FOCUSED_WORKSPACE)

        for _ in range(self.config.steps):
            await self._run_workspace_command(commands.opacity_minus(current, stride))
            await self.sleep(delay)

        # Hide the destination before it is shown; new windows inherit this
        await self._run_workspace_command(
            commands.opacity_set(commands.workspace_criteria(name), 0)
        )
        await self.transport.run_command(commands.switch_workspace(name))

        # The source is off-screen now
        await self._run_workspace_command(commands.opacity_set(current, 1))

        for _ in range(self.config.steps):
            await self._run_workspace_command(commands.opacity_plus(focused, stride))
            await self.sleep(delay)

        await self._run_workspace_command(commands.opacity_set(focused, 1))
        return plan
