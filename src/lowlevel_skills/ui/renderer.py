"""Rendering helpers for the terminal skill browser.

Everything here returns strings instead of printing, so a render is a pure
function of its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable, Optional, Sequence

from lowlevel_skills.store.models import Bundle, SkillRecord


@dataclass
class CLIColors:
    """ANSI color codes for terminal output."""

    reset: str = "\033[0m"
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    reverse: str = "\033[7m"
    blue: str = "\033[34m"
    cyan: str = "\033[36m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    magenta: str = "\033[35m"
    red: str = "\033[31m"
    gray: str = "\033[90m"

    @classmethod
    def plain(cls) -> "CLIColors":
        """A palette with every code blanked out."""
        return cls(**{f.name: "" for f in fields(cls)})

    def accent(self, name: str) -> str:
        """Map a bundle accent name to an ANSI code."""
        if name == "amber":
            return self.yellow
        return getattr(self, name, self.cyan)


# Trailing pill after the agent names; the skills CLI supports more than listed
MORE_AGENTS_LABEL = "and more..."

COPY_LABELS = {
    "idle": "[COPY]",
    "copied": "COPIED!",
    "failed": "COPY FAILED",
}


class BrowserRenderer:
    """Render category tabs, skill cards, and bundle cards.

    Args:
        source: ``<org>/<repo>`` slug used for skill links.
        branch: Branch used for skill links.
        colors: Optional ANSI color palette override.
    """

    def __init__(
        self,
        source: str,
        branch: str = "main",
        colors: Optional[CLIColors] = None,
    ) -> None:
        self._source = source
        self._branch = branch
        self._colors = colors or CLIColors()

    def render_tabs(self, categories: Sequence[str], active: str) -> str:
        """Render the category tab row with the active tab highlighted."""
        c = self._colors
        tabs = []
        for category in ["all", *categories]:
            if category == active:
                tabs.append(f"{c.reverse}{c.bold}[{category}]{c.reset}")
            else:
                tabs.append(f"{c.dim} {category} {c.reset}")
        return " ".join(tabs)

    def render_skill_card(self, skill: SkillRecord) -> str:
        """Render one skill card."""
        c = self._colors
        lines = [
            f"  {c.bold}{c.green}/{skill.name}{c.reset}  {c.gray}{skill.category}{c.reset}",
        ]
        if skill.description:
            lines.append(f"    {skill.description}")
        lines.append(f"    {c.dim}{skill.url(self._source, self._branch)}{c.reset}")
        return "\n".join(lines)

    def render_skill_grid(self, skills: Iterable[SkillRecord], heading: str = "Skills") -> str:
        """Render a list of skill cards under a count heading."""
        skills = list(skills)
        c = self._colors
        header = f"{c.bold}{heading} ({len(skills)}){c.reset}"
        if not skills:
            return f"{header}\n  {c.dim}(no skills){c.reset}"
        return header + "\n" + "\n\n".join(self.render_skill_card(s) for s in skills)

    def render_bundle_card(self, bundle: Bundle, command: str, copy_state: str = "idle") -> str:
        """Render one bundle card with its install command and copy button."""
        c = self._colors
        accent = c.accent(bundle.color)
        button_color = {"copied": c.green, "failed": c.red}.get(copy_state, c.blue)
        button = COPY_LABELS.get(copy_state, COPY_LABELS["idle"])
        lines = [f"  {accent}{c.bold}{bundle.label}{c.reset} {c.gray}({bundle.tag}){c.reset}"]
        if bundle.description:
            lines.append(f"    {bundle.description}")
        lines.append(f"    {c.dim}${c.reset} {command}")
        lines.append(f"    {button_color}{button}{c.reset}")
        return "\n".join(lines)

    def render_install_all(self, command: str, copy_state: str = "idle") -> str:
        """Render the install-everything command with its copy button."""
        c = self._colors
        button_color = {"copied": c.green, "failed": c.red}.get(copy_state, c.blue)
        button = COPY_LABELS.get(copy_state, COPY_LABELS["idle"])
        return f"{c.dim}${c.reset} {c.bold}{command}{c.reset}  {button_color}{button}{c.reset}"

    def render_agents(self, agents: Sequence[str]) -> str:
        """Render the supported-agents line."""
        if not agents:
            return ""
        c = self._colors
        pills = ", ".join(agents)
        return f"{c.gray}Works with:{c.reset} {pills}, {c.dim}{MORE_AGENTS_LABEL}{c.reset}"

    def render_notice(self, message: str, error: bool = False) -> str:
        """Render a one-line status or error notice."""
        c = self._colors
        if error:
            return f"{c.red}* Error: {message}{c.reset}"
        return f"{c.yellow}* {message}{c.reset}"
