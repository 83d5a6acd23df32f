"""
Target resolution for workspace crossfades.

Decides which output a workspace switch happens on, which workspace is
currently shown there, and whether a fade is needed at all.
"""

import logging
from typing import List, Optional, Sequence

from .errors import ErrorCode, ResolutionError
from .models import OutputSnapshot, SwitchPlan, WorkspaceSnapshot
from .transport import ControlTransport

logger = logging.getLogger(__name__)


def find_workspace(workspaces: Sequence[WorkspaceSnapshot], name: str) -> Optional[WorkspaceSnapshot]:
    """Return the workspace called ``name``, if it exists."""
    return next((ws for ws in workspaces if ws.name == name), None)


def resolve_output(
    target: Optional[WorkspaceSnapshot],
    outputs: Optional[Sequence[OutputSnapshot]],
    target_name: str = "",
) -> str:
    """
    Resolve the output a workspace switch lands on.

    An existing workspace stays on its own output. A new one is created on
    the focused output, or the first output if none is focused.

    Raises:
        ResolutionError: If the workspace is new and there are no outputs
    """
    if target is not None:
        return target.output

    if not outputs:
        raise ResolutionError(ErrorCode.NO_OUTPUTS, "Couldn't get any outputs", target=target_name)

    focused = next((output for output in outputs if output.focused), None)
    return (focused or outputs[0]).name


def resolve_current(workspaces: Sequence[WorkspaceSnapshot], output: str) -> WorkspaceSnapshot:
    """
    Resolve the workspace currently shown on ``output``.

    Falls back to the globally focused workspace.

    Raises:
        ResolutionError: If neither exists
    """
    current = next((ws for ws in workspaces if ws.visible and ws.output == output), None)
    if current is None:
        current = next((ws for ws in workspaces if ws.focused), None)
    if current is None:
        raise ResolutionError(ErrorCode.NO_CURRENT_WORKSPACE, "Couldn't find current workspace")
    return current


def resolve_switch(
    target_name: str,
    workspaces: Sequence[WorkspaceSnapshot],
    outputs: Optional[Sequence[OutputSnapshot]] = None,
) -> SwitchPlan:
    """
    Resolve a switch to ``target_name`` against a snapshot of Sway state.

    Args:
        target_name: Workspace to switch to
        workspaces: All workspaces
        outputs: All outputs (only consulted when the target does not exist)

    Returns:
        SwitchPlan; ``skip`` is set when the target is already visible

    Raises:
        ResolutionError: If no output or current workspace can be determined
    """
    target = find_workspace(workspaces, target_name)
    output = resolve_output(target, outputs, target_name)
    current = resolve_current(workspaces, output)
    skip = target is not None and target.visible

    logger.debug(
        "Resolved switch to %r: output=%s current=%s skip=%s",
        target_name, output, current.name, skip,
    )

    return SwitchPlan(
        target_name=target_name,
        output=output,
        current=current,
        skip=skip,
        target=target,
    )


async def resolve_from_transport(transport: ControlTransport, target_name: str) -> SwitchPlan:
    """Query fresh Sway state and resolve a switch to ``target_name``."""
    workspaces: List[WorkspaceSnapshot] = await transport.get_workspaces()

    outputs = None
    if find_workspace(workspaces, target_name) is None:
        outputs = await transport.get_outputs()

    return resolve_switch(target_name, workspaces, outputs)
