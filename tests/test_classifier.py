"""Tests for classifier.py — command string → application identity."""

import pytest

from session_monitor.classifier import classify, match_base_name, match_bundle
from session_monitor.constants import APP_BASE_NAMES, APP_BUNDLE_FRAGMENTS
from session_monitor.models import AppIdentity

# ---------------------------------------------------------------------------
# Bundle-path fragments
# ---------------------------------------------------------------------------


class TestBundleFragments:
    @pytest.mark.parametrize(
        "command, expected",
        [
            ("/Applications/Zed.app/Contents/MacOS/cli", AppIdentity.ZED),
            ("/Applications/Zed.app/Contents/MacOS/zed", AppIdentity.ZED),
            (
                "/Applications/Visual Studio Code.app/Contents/MacOS/Electron",
                AppIdentity.VSCODE,
            ),
            (
                "/Applications/Visual Studio Code.app/Contents/Frameworks/"
                "Code Helper (Plugin).app/Contents/MacOS/Code Helper (Plugin)",
                AppIdentity.VSCODE,
            ),
            ("/Applications/Cursor.app/Contents/MacOS/Cursor", AppIdentity.CURSOR),
            ("/Applications/Windsurf.app/Contents/MacOS/Electron", AppIdentity.WINDSURF),
            ("/Applications/iTerm.app/Contents/MacOS/iTerm2", AppIdentity.ITERM),
            ("/Applications/iTerm2.app/Contents/MacOS/iTerm2", AppIdentity.ITERM),
            (
                "/System/Applications/Utilities/Terminal.app/Contents/MacOS/Terminal",
                AppIdentity.TERMINAL,
            ),
            ("/Applications/Alacritty.app/Contents/MacOS/alacritty", AppIdentity.ALACRITTY),
            ("/Applications/kitty.app/Contents/MacOS/kitty", AppIdentity.KITTY),
            ("/Applications/Warp.app/Contents/MacOS/stable", AppIdentity.WARP),
            ("/Applications/Hyper.app/Contents/MacOS/Hyper", AppIdentity.HYPER),
            (
                "/Applications/Sublime Text.app/Contents/MacOS/sublime_text",
                AppIdentity.SUBLIME_TEXT,
            ),
        ],
    )
    def test_bundle_paths(self, command, expected):
        assert classify(command) == expected

    @pytest.mark.parametrize("fragment, expected", APP_BUNDLE_FRAGMENTS)
    def test_any_case_mixture_and_surroundings(self, fragment, expected):
        for variant in (fragment.upper(), fragment.title(), fragment.swapcase()):
            assert classify(f"/some/prefix/{variant}/Contents/MacOS/helper") == expected
            assert classify(variant) == expected

    def test_bundle_beats_base_name(self):
        # Base name "code" alone would be VS Code
        assert classify("/Applications/Cursor.app/Contents/Resources/app/bin/code") == (
            AppIdentity.CURSOR
        )

    def test_match_bundle_ignores_plain_names(self):
        assert match_bundle("zed") is None


# ---------------------------------------------------------------------------
# Base names
# ---------------------------------------------------------------------------


class TestBaseNames:
    @pytest.mark.parametrize("name, expected", list(APP_BASE_NAMES.items()))
    def test_exact_base_names(self, name, expected):
        assert classify(name) == expected
        assert classify(name.upper()) == expected
        assert classify(f"/usr/local/bin/{name}") == expected

    def test_electron_helpers_alias_to_vscode(self):
        assert classify("Electron") == AppIdentity.VSCODE
        assert classify("Code Helper") == AppIdentity.VSCODE

    def test_base_name_must_match_exactly(self):
        assert classify("/usr/local/bin/zed-preview") is None
        assert classify("kittyd") is None
        assert match_base_name("/opt/bin/subl") == AppIdentity.SUBLIME_TEXT


# ---------------------------------------------------------------------------
# No match
# ---------------------------------------------------------------------------


class TestNoMatch:
    @pytest.mark.parametrize(
        "command",
        ["", "   ", "-zsh", "/bin/zsh", "login", "node", "claude", "/usr/bin/tmux", "launchd"],
    )
    def test_unknown_commands(self, command):
        assert classify(command) is None

    def test_none_input(self):
        assert classify(None) is None

    def test_deterministic(self):
        command = "/Applications/Zed.app/Contents/MacOS/cli"
        assert {classify(command) for _ in range(5)} == {AppIdentity.ZED}
