"""Interactive terminal skill browser.

The controller keeps the current selection, delegates all selection logic
to the Resolver, and renders the catalog as category tabs, skill cards,
and bundle cards with a copy-to-clipboard action.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional

from lowlevel_skills.errors import ClipboardWriteError, UnknownBundleError
from lowlevel_skills.store.models import (
    AllSkills,
    BundleSelection,
    CategorySelection,
    InstallPlan,
    SelectionRequest,
)
from lowlevel_skills.store.resolver import Resolver
from lowlevel_skills.ui.clipboard import ClipboardWriter, copy_to_clipboard
from lowlevel_skills.ui.renderer import BrowserRenderer

logger = logging.getLogger(__name__)

ALL_TAB = "all"

HELP_TEXT = """Commands:
  tab <category>   Show one category (tab all shows everything)
  copy <bundle>    Copy a bundle's install command
  copy all         Copy the install-everything command
  search <terms>   Filter the skill cards (search with no terms clears)
  help             Show this help
  quit             Leave the browser"""


class CopyStatus(str, Enum):
    """Transient state of the last copy action."""

    IDLE = "idle"
    COPIED = "copied"
    FAILED = "failed"


@dataclass(frozen=True)
class BrowserState:
    """Everything the browser view is rendered from.

    Args:
        request: The current selection request.
        active_tab: Tab label currently highlighted.
        query: Keyword filter applied on top of the selection.
        copy_target: Bundle tag (or ``"all"``) the copy status refers to.
        copy_status: Result of the last copy action.
        notice: One-line status message, if any.
        notice_is_error: Whether ``notice`` is an error.
    """

    request: SelectionRequest = AllSkills()
    active_tab: str = ALL_TAB
    query: str = ""
    copy_target: Optional[str] = None
    copy_status: CopyStatus = CopyStatus.IDLE
    notice: str = ""
    notice_is_error: bool = False


class BrowserController:
    """Bind the catalog and resolver to the terminal browser view.

    Args:
        resolver: Resolver for the catalog being browsed.
        renderer: View renderer.
        clipboard: Callable that writes text to the clipboard.
        copied_reset_seconds: How long a copy status stays visible.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        resolver: Resolver,
        renderer: BrowserRenderer,
        clipboard: ClipboardWriter = copy_to_clipboard,
        copied_reset_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._resolver = resolver
        self._renderer = renderer
        self._clipboard = clipboard
        self._copied_reset_seconds = copied_reset_seconds
        self._clock = clock
        self._copied_at: Optional[float] = None
        self._state = BrowserState()
        self._plan = resolver.resolve(self._state.request)

    @property
    def state(self) -> BrowserState:
        return self._state

    @property
    def plan(self) -> InstallPlan:
        return self._plan

    # ── Event handlers ──────────────────────────────────────────────

    def on_category_selected(self, category: str) -> InstallPlan:
        """Switch the skill grid to a category tab.

        Args:
            category: Category name, or ``"all"`` for the whole catalog.

        Returns:
            The plan now shown in the grid.
        """
        if category == ALL_TAB:
            request: SelectionRequest = AllSkills()
        else:
            request = CategorySelection(category)

        self._plan = self._resolver.resolve(request)
        notice = ""
        if self._plan.is_empty:
            notice = f"No skills in category '{category}'"
        self._state = replace(
            self._state,
            request=request,
            active_tab=category,
            notice=notice,
            notice_is_error=False,
        )
        return self._plan

    def on_search(self, query: str) -> None:
        """Filter the visible skill cards by keyword."""
        self._state = replace(self._state, query=query.strip(), notice="", notice_is_error=False)

    def on_bundle_copy_clicked(self, tag: str) -> CopyStatus:
        """Copy a bundle's install command to the clipboard.

        Failures are surfaced in the view state, never raised.

        Args:
            tag: Bundle tag.

        Returns:
            The resulting copy status.
        """
        try:
            command = self._resolver.resolve(BundleSelection(tag)).command
        except UnknownBundleError as e:
            logger.warning("%s", e.message)
            return self._set_copy_result(tag, CopyStatus.FAILED, e.message, error=True)
        return self._copy(tag, command)

    def on_copy_all_clicked(self) -> CopyStatus:
        """Copy the install-everything command to the clipboard."""
        return self._copy(ALL_TAB, self._resolver.resolve(AllSkills()).command)

    def expire_copy_status(self) -> bool:
        """Reset the copy status once its display time has passed.

        Returns:
            True if the status was reset.
        """
        if self._copied_at is None:
            return False
        if self._clock() - self._copied_at < self._copied_reset_seconds:
            return False
        self._copied_at = None
        self._state = replace(
            self._state,
            copy_target=None,
            copy_status=CopyStatus.IDLE,
            notice="",
            notice_is_error=False,
        )
        return True

    def notify(self, message: str, error: bool = False) -> None:
        """Show a one-line notice on the next render."""
        self._state = replace(self._state, notice=message, notice_is_error=error)

    def _copy(self, target: str, command: str) -> CopyStatus:
        try:
            self._clipboard(command)
        except ClipboardWriteError as e:
            logger.warning("%s", e.message)
            return self._set_copy_result(target, CopyStatus.FAILED, e.message, error=True)
        logger.debug("Copied command for '%s'", target)
        return self._set_copy_result(target, CopyStatus.COPIED, f"Copied: {command}")

    def _set_copy_result(
        self, target: str, status: CopyStatus, notice: str, error: bool = False,
    ) -> CopyStatus:
        self._copied_at = self._clock()
        self._state = replace(
            self._state,
            copy_target=target,
            copy_status=status,
            notice=notice,
            notice_is_error=error,
        )
        return status

    # ── View ────────────────────────────────────────────────────────

    def _copy_state_for(self, target: str) -> str:
        if self._state.copy_target == target:
            return self._state.copy_status.value
        return CopyStatus.IDLE.value

    def render(self) -> str:
        """Render the full browser view from the current state."""
        catalog = self._resolver.catalog
        r = self._renderer
        state = self._state

        skills = [catalog.find_skill(name) for name in self._plan.names]
        if state.query:
            skills = [s for s in skills if s.matches(state.query)]
        heading = "Skills" if not state.query else f"Skills matching '{state.query}'"

        sections: List[str] = [
            r.render_install_all(
                self._resolver.resolve(AllSkills()).command,
                self._copy_state_for(ALL_TAB),
            ),
            r.render_tabs(catalog.list_categories(), state.active_tab),
            r.render_skill_grid(skills, heading),
        ]

        bundle_cards = [
            r.render_bundle_card(
                bundle,
                self._resolver.resolve(BundleSelection(bundle.tag)).command,
                self._copy_state_for(bundle.tag),
            )
            for bundle in catalog.list_bundles()
        ]
        if bundle_cards:
            sections.append("Bundles\n" + "\n\n".join(bundle_cards))

        agents = r.render_agents(catalog.list_agents())
        if agents:
            sections.append(agents)
        if state.notice:
            sections.append(r.render_notice(state.notice, error=state.notice_is_error))

        return "\n\n".join(sections)


def _prompt(text: str) -> str:
    """Display a prompt and get user input, ensuring proper flushing."""
    sys.stdout.write(text)
    sys.stdout.flush()
    return input().strip()


def handle_command(controller: BrowserController, line: str) -> bool:
    """Apply one browser command.

    Args:
        controller: The browser controller.
        line: Raw command line typed by the user.

    Returns:
        False when the user asked to quit.
    """
    command, _, arg = line.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in ("quit", "exit", "q"):
        return False
    if command in ("tab", "t"):
        controller.on_category_selected(arg or ALL_TAB)
    elif command in ("copy", "c"):
        if not arg:
            controller.notify("Usage: copy <bundle> | copy all", error=True)
        elif arg == ALL_TAB:
            controller.on_copy_all_clicked()
        else:
            controller.on_bundle_copy_clicked(arg)
    elif command in ("search", "s", "/"):
        controller.on_search(arg)
    elif command in ("help", "h", "?"):
        controller.notify(HELP_TEXT)
    elif command:
        controller.notify(f"Unknown command: {command} (type 'help')", error=True)
    return True


def run_interactive(
    controller: BrowserController,
    prompt: Callable[[str], str] = _prompt,
) -> int:
    """Run the browser's prompt loop until quit or EOF.

    Args:
        controller: The browser controller.
        prompt: Input function, replaceable for tests.

    Returns:
        Exit code.
    """
    print(controller.render())
    while True:
        try:
            line = prompt("\nskills> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        controller.expire_copy_status()
        if not handle_command(controller, line):
            return 0
        print(controller.render())
