"""Sway IPC control transport.

Wraps an ``i3ipc.aio.Connection`` and turns failed replies into
:class:`TransportError` so a fade sequence aborts on the first failure.
"""

import logging
from typing import List, Optional, Protocol

from i3ipc.aio import Connection

from .errors import ErrorCode, TransportError
from .models import OutputSnapshot, WorkspaceSnapshot

logger = logging.getLogger(__name__)

NO_MATCH_ERROR = "No matching node"


class ControlTransport(Protocol):
    """Capabilities the fade engine needs from the window manager."""

    async def run_command(self, command: str) -> None: ...

    async def get_workspaces(self) -> List[WorkspaceSnapshot]: ...

    async def get_outputs(self) -> List[OutputSnapshot]: ...


class SwayTransport:
    """Control transport backed by the Sway IPC socket."""

    def __init__(self, socket_path: Optional[str] = None, connection: Optional[Connection] = None):
        """
        Initialize Sway transport.

        Args:
            socket_path: Sway IPC socket (defaults to $SWAYSOCK)
            connection: Already connected i3ipc Connection (skips connect())
        """
        self.socket_path = socket_path
        self.sway = connection

    async def connect(self) -> "SwayTransport":
        """
        Connect to Sway.

        Returns:
            self, for chaining

        Raises:
            TransportError: If the IPC socket cannot be reached
        """
        if self.sway is not None:
            return self

        try:
            self.sway = await Connection(socket_path=self.socket_path).connect()
        except Exception as e:
            raise TransportError(
                "connect",
                str(e) or type(e).__name__,
                code=ErrorCode.SWAY_NOT_RUNNING,
            ) from e

        logger.info("Connected to Sway IPC")
        return self

    def _require_connection(self) -> Connection:
        if self.sway is None:
            raise TransportError("connect", "transport is not connected", code=ErrorCode.SWAY_NOT_RUNNING)
        return self.sway

    async def run_command(self, command: str) -> None:
        """
        Run a Sway command.

        Raises:
            TransportError: If the IPC call fails or Sway rejects the command
                (code COMMAND_NO_MATCH when the criteria selected nothing)
        """
        sway = self._require_connection()
        logger.debug("Running command: %s", command)

        try:
            replies = await sway.command(command)
        except Exception as e:
            raise TransportError(command, str(e) or type(e).__name__) from e

        if not replies:
            raise TransportError(command, "empty reply")

        errors = [reply.error or "unknown error" for reply in replies if not reply.success]
        if errors:
            # Criteria that select no container are reported as a failed reply
            code = ErrorCode.COMMAND_NO_MATCH if all(
                error.startswith(NO_MATCH_ERROR) for error in errors
            ) else ErrorCode.COMMAND_REJECTED
            raise TransportError(command, "; ".join(errors), code=code)

    async def get_workspaces(self) -> List[WorkspaceSnapshot]:
        """Query GET_WORKSPACES."""
        sway = self._require_connection()
        try:
            replies = await sway.get_workspaces()
        except Exception as e:
            raise TransportError("get_workspaces", str(e) or type(e).__name__, code=ErrorCode.QUERY_FAILED) from e
        return [WorkspaceSnapshot.from_reply(reply) for reply in replies]

    async def get_outputs(self) -> List[OutputSnapshot]:
        """Query GET_OUTPUTS."""
        sway = self._require_connection()
        try:
            replies = await sway.get_outputs()
        except Exception as e:
            raise TransportError("get_outputs", str(e) or type(e).__name__, code=ErrorCode.QUERY_FAILED) from e
        return [OutputSnapshot.from_reply(reply) for reply in replies]
