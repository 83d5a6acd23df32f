"""Sway command strings used by the fade sequencer."""

import re
from typing import Union

from .models import FOCUSED_WORKSPACE

Scope = Union[str, int]


def _opacity_value(value: float) -> str:
    # Integral values render as "0"/"1" like the Sway docs
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _quote(value: str) -> str:
    return '"' + value.replace('"', '\\"') + '"'


def mark_criteria(mark: Scope) -> str:
    return f"[con_mark={mark}]"


def workspace_criteria(workspace: Scope) -> str:
    """Criteria matching exactly the workspace named ``workspace``.

    Sway matches ``workspace=`` as an unanchored regex, so the name is
    escaped and anchored; "1" must not also match "10" or "1: web".
    """
    if workspace == FOCUSED_WORKSPACE:
        return f"[workspace={FOCUSED_WORKSPACE}]"
    pattern = "^" + re.escape(str(workspace)) + "$"
    return f"[workspace={_quote(pattern)}]"


def claim_mark(sentinel: str, token: int) -> str:
    """Move the ``sentinel`` mark onto a fresh numeric token in one command."""
    return f"{mark_criteria(sentinel)} mark {token}; unmark {sentinel}"


def unmark(token: int) -> str:
    return f"{mark_criteria(token)} unmark {token}"


def kill(token: int) -> str:
    return f"{mark_criteria(token)} kill"


def opacity_plus(criteria: str, delta: float) -> str:
    return f"{criteria} opacity plus {_opacity_value(delta)}"


def opacity_minus(criteria: str, delta: float) -> str:
    return f"{criteria} opacity minus {_opacity_value(delta)}"


def opacity_set(criteria: str, value: float) -> str:
    return f"{criteria} opacity {_opacity_value(value)}"


def switch_workspace(name: str) -> str:
    # Quoted so ";" or "," in a name cannot split the command
    return f"workspace {_quote(name)}"
