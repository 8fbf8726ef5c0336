"""Data models for the skill catalog and install plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple, Union

from lowlevel_skills.errors import UnknownSkillWarning

GITHUB_URL = "https://github.com"


@dataclass(frozen=True)
class SkillRecord:
    """A skill available in the catalog.

    Attributes:
        name: Unique lowercase-hyphenated identifier (the skill folder name).
        category: Category the skill is filed under (also its parent folder).
        description: One-line human-readable description.
    """

    name: str
    category: str
    description: str = ""

    def url(self, source: str, branch: str = "main") -> str:
        """Link to the skill's SKILL.md on GitHub.

        Args:
            source: ``<org>/<repo>`` slug of the skills repository.
            branch: Branch to link against.

        Returns:
            The GitHub tree URL of the skill document.
        """
        return (
            f"{GITHUB_URL}/{source}/tree/{branch}"
            f"/skills/{self.category}/{self.name}/SKILL.md"
        )

    def matches(self, query: str) -> bool:
        """Check if this skill matches a search query.

        Searches name, category, and description (case-insensitive).

        Args:
            query: Space-separated search terms. All terms must match.

        Returns:
            True if all query terms match at least one field.
        """
        terms = query.lower().split()
        if not terms:
            return True

        searchable = " ".join([
            self.name.lower(),
            self.category.lower(),
            self.description.lower(),
        ])

        return all(term in searchable for term in terms)


@dataclass(frozen=True)
class Bundle:
    """A curated group of skills installed together.

    Attributes:
        tag: Unique short identifier (e.g. ``rust``).
        label: Display name.
        description: One-line summary of what the bundle covers.
        members: Skill names in authored order.
        color: Accent color used when rendering the bundle card.
    """

    tag: str
    label: str
    description: str = ""
    members: Tuple[str, ...] = ()
    color: str = "cyan"


# ── Selection requests ──────────────────────────────────────────────


@dataclass(frozen=True)
class AllSkills:
    """Select every skill in the catalog."""


@dataclass(frozen=True)
class CategorySelection:
    """Select every skill filed under one category."""

    category: str


@dataclass(frozen=True)
class BundleSelection:
    """Select the members of a predefined bundle."""

    tag: str


@dataclass(frozen=True, init=False)
class ExplicitSelection:
    """Select skills by name, as passed to ``--skill``.

    Accepts any iterable of names; they are stored as a tuple so the
    request stays hashable.
    """

    names: Tuple[str, ...]

    def __init__(self, names: Iterable[str]):
        if isinstance(names, str):
            names = names.split()
        object.__setattr__(self, "names", tuple(names))


SelectionRequest = Union[AllSkills, CategorySelection, BundleSelection, ExplicitSelection]


@dataclass(frozen=True)
class InstallPlan:
    """Resolved skill names and the command that installs them.

    Attributes:
        names: Deduplicated skill names.
        command: Shell command for the ``skills`` CLI, or ``""`` when empty.
        warnings: Unknown names dropped from an explicit request.
    """

    names: Tuple[str, ...] = ()
    command: str = ""
    warnings: Tuple[UnknownSkillWarning, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not self.names

    def to_dict(self) -> dict:
        """Serialize for ``--json`` output."""
        return {
            "names": list(self.names),
            "command": self.command,
            "warnings": [w.message for w in self.warnings],
        }
