"""Sway command string tests."""

import re

import pytest

from sway_fade import commands
from sway_fade.models import FOCUSED_WORKSPACE


def _criteria_pattern(criteria: str) -> str:
    return re.match(r'\[workspace="(.*)"\]$', criteria).group(1).replace('\\"', '"')


class TestWorkspaceCriteria:

    def test_focused_keyword_unchanged(self):
        assert commands.workspace_criteria(FOCUSED_WORKSPACE) == "[workspace=__focused__]"

    def test_name_is_anchored(self):
        assert commands.workspace_criteria("1") == '[workspace="^1$"]'

    @pytest.mark.parametrize("name,others", [
        ("1", ["10", "11", "1: web", "21"]),
        ("2: mail", ["12: mail", "2: mail2"]),
        ("a.b", ["axb"]),
        ("(x)", ["x"]),
    ])
    def test_matches_only_exact_name(self, name, others):
        pattern = _criteria_pattern(commands.workspace_criteria(name))

        assert re.search(pattern, name)
        assert not any(re.search(pattern, other) for other in others)

    def test_quotes_escaped(self):
        criteria = commands.workspace_criteria('say "hi"')

        assert re.search(_criteria_pattern(criteria), 'say "hi"')


class TestSwitchWorkspace:

    def test_name_quoted(self):
        assert commands.switch_workspace("2: mail") == 'workspace "2: mail"'

    def test_separators_stay_inside_quotes(self):
        assert commands.switch_workspace('a; kill') == 'workspace "a; kill"'
        assert commands.switch_workspace('a"b') == 'workspace "a\\"b"'


class TestOpacity:

    @pytest.mark.parametrize("value,expected", [(1, "1"), (0.0, "0"), (0.25, "0.25"), (1 / 3, "0.3333333333333333")])
    def test_value_format(self, value, expected):
        assert commands.opacity_set("[con_mark=7]", value) == f"[con_mark=7] opacity {expected}"
