"""
Pydantic data models for Sway Fade.

Defines fade timing, the three operation kinds, and read-only snapshots of
Sway workspace and output state.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

# Sentinel marks applied by the user's Sway config before sway-fade runs
FADE_IN_MARK = "fade"
FADE_OUT_MARK = "quit"

# Upper bound for step counts (u32)
MAX_STEPS = 2**32 - 1

# Scope keyword for "the currently focused workspace" in Sway criteria
FOCUSED_WORKSPACE = "__focused__"


class OperationKind(str, Enum):
    """Fade operation selected for one invocation."""
    FADE_IN = "in"
    FADE_OUT = "out"
    SWITCH_WORKSPACE = "ws"


class FadeConfig(BaseModel):
    """Fade timing, fixed for the lifetime of one invocation."""

    model_config = {"frozen": True}

    steps: int = Field(10, gt=0, le=MAX_STEPS, description="Number of opacity steps per fade")
    duration_seconds: float = Field(0.1, gt=0, description="Total fade duration in seconds")

    @property
    def stride(self) -> float:
        """Opacity delta applied per step."""
        return 1.0 / self.steps

    @property
    def per_step_delay(self) -> float:
        """Suspension between steps of a window fade."""
        return self.duration_seconds / self.steps

    @property
    def crossfade_delay(self) -> float:
        """Suspension between steps of each half of a workspace crossfade."""
        return self.per_step_delay / 2


class FadeIn(BaseModel):
    """Fade the newly created window (marked ``fade``) in."""

    model_config = {"frozen": True}

    kind: Literal[OperationKind.FADE_IN] = OperationKind.FADE_IN


class FadeOut(BaseModel):
    """Fade the window marked ``quit`` out, then kill it."""

    model_config = {"frozen": True}

    kind: Literal[OperationKind.FADE_OUT] = OperationKind.FADE_OUT


class SwitchWorkspace(BaseModel):
    """Crossfade from the current workspace to ``target_name``."""

    model_config = {"frozen": True}

    kind: Literal[OperationKind.SWITCH_WORKSPACE] = OperationKind.SWITCH_WORKSPACE
    target_name: str = Field(..., min_length=1, description="Workspace to switch to")


Operation = Union[FadeIn, FadeOut, SwitchWorkspace]


def _reply_field(reply: Any, name: str, default: Any = None) -> Any:
    """Read a field from an i3ipc reply, falling back to its raw IPC data.

    Sway-only fields (e.g. ``focused`` on outputs) are not always exposed as
    attributes by i3ipc.
    """
    value = getattr(reply, name, None)
    if value is not None:
        return value
    ipc_data = getattr(reply, "ipc_data", None)
    if isinstance(ipc_data, dict):
        return ipc_data.get(name, default)
    return default


class WorkspaceSnapshot(BaseModel):
    """Read-only view of a workspace from GET_WORKSPACES."""

    model_config = {"frozen": True}

    name: str
    num: int = -1
    output: str
    visible: bool = False
    focused: bool = False

    @classmethod
    def from_reply(cls, reply: Any) -> "WorkspaceSnapshot":
        """Build a snapshot from an i3ipc WorkspaceReply."""
        return cls(
            name=_reply_field(reply, "name"),
            num=_reply_field(reply, "num", -1),
            output=_reply_field(reply, "output"),
            visible=bool(_reply_field(reply, "visible", False)),
            focused=bool(_reply_field(reply, "focused", False)),
        )


class OutputSnapshot(BaseModel):
    """Read-only view of an output from GET_OUTPUTS."""

    model_config = {"frozen": True}

    name: str
    focused: bool = False

    @classmethod
    def from_reply(cls, reply: Any) -> "OutputSnapshot":
        """Build a snapshot from an i3ipc OutputReply."""
        return cls(
            name=_reply_field(reply, "name"),
            focused=bool(_reply_field(reply, "focused", False)),
        )


class SwitchPlan(BaseModel):
    """Resolved targets for a workspace switch."""

    model_config = {"frozen": True}

    target_name: str = Field(..., description="Requested workspace name")
    output: str = Field(..., description="Output the target lives on or will be created on")
    current: WorkspaceSnapshot = Field(..., description="Workspace currently shown on that output")
    skip: bool = Field(False, description="Target already visible, switch without fading")
    target: Optional[WorkspaceSnapshot] = Field(None, description="Existing target workspace, if any")
