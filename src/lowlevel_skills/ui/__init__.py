"""Terminal browser for the skill catalog."""

from lowlevel_skills.ui.browser import BrowserController, BrowserState, CopyStatus, run_interactive
from lowlevel_skills.ui.clipboard import copy_to_clipboard
from lowlevel_skills.ui.renderer import BrowserRenderer, CLIColors

__all__ = [
    "BrowserController",
    "BrowserRenderer",
    "BrowserState",
    "CLIColors",
    "CopyStatus",
    "copy_to_clipboard",
    "run_interactive",
]
