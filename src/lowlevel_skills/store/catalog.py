"""Skill catalog: load, validate, search, and list available skills."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from lowlevel_skills.errors import (
    CatalogError,
    CatalogIntegrityError,
    SkillNotFoundError,
    UnknownBundleError,
)
from lowlevel_skills.store.models import Bundle, SkillRecord

logger = logging.getLogger(__name__)

# Default catalog file ships with the store package
DEFAULT_CATALOG_PATH = Path(__file__).parent / "skill_catalog.yaml"


@dataclass(frozen=True)
class Catalog:
    """Immutable set of skills, bundles, and supported agents.

    Integrity is checked on construction: skill names and bundle tags must
    be unique and every bundle member must name a catalog skill.

    Args:
        skills: Skill records in display order. Must not be empty.
        bundles: Bundle definitions in display order.
        agents: Display names of agents the skills CLI installs into.
        source: Where the catalog came from, for error messages.
    """

    skills: Tuple[SkillRecord, ...]
    bundles: Tuple[Bundle, ...] = ()
    agents: Tuple[str, ...] = ()
    source: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", tuple(self.skills))
        object.__setattr__(self, "bundles", tuple(self.bundles))
        object.__setattr__(self, "agents", tuple(self.agents))

        if not self.skills:
            raise CatalogError("Catalog has no skills", self.source)

        problems: List[str] = []
        by_name: Dict[str, SkillRecord] = {}
        for skill in self.skills:
            if skill.name in by_name:
                problems.append(f"duplicate skill name '{skill.name}'")
            by_name.setdefault(skill.name, skill)

        by_tag: Dict[str, Bundle] = {}
        for bundle in self.bundles:
            if bundle.tag in by_tag:
                problems.append(f"duplicate bundle tag '{bundle.tag}'")
            by_tag.setdefault(bundle.tag, bundle)
            for member in bundle.members:
                if member not in by_name:
                    problems.append(
                        f"bundle '{bundle.tag}' references unknown skill '{member}'"
                    )

        if problems:
            raise CatalogIntegrityError(problems, self.source)

        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_by_tag", by_tag)

    def list_skills(self) -> Tuple[SkillRecord, ...]:
        """All skills in declaration order."""
        return self.skills

    def list_categories(self) -> Tuple[str, ...]:
        """Distinct categories in first-seen order."""
        return tuple(dict.fromkeys(skill.category for skill in self.skills))

    def list_bundles(self) -> Tuple[Bundle, ...]:
        """All bundles in declaration order."""
        return self.bundles

    def list_agents(self) -> Tuple[str, ...]:
        """Agents the skills CLI can install into."""
        return self.agents

    def skills_in(self, category: str) -> Tuple[SkillRecord, ...]:
        """Skills filed under ``category``, in catalog order."""
        return tuple(s for s in self.skills if s.category == category)

    def has_skill(self, name: str) -> bool:
        return name in self._by_name

    def find_skill(self, name: str) -> SkillRecord:
        """Look up a skill by exact (case-sensitive) name.

        Args:
            name: Skill name.

        Returns:
            The matching SkillRecord.

        Raises:
            SkillNotFoundError: If no skill has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise SkillNotFoundError(name, list(self._by_name)) from None

    def find_bundle(self, tag: str) -> Bundle:
        """Look up a bundle by tag.

        Raises:
            UnknownBundleError: If no bundle has that tag.
        """
        try:
            return self._by_tag[tag]
        except KeyError:
            raise UnknownBundleError(tag, list(self._by_tag)) from None

    def search(self, query: str) -> Tuple[SkillRecord, ...]:
        """Search skills by keyword.

        Args:
            query: Space-separated search terms.

        Returns:
            Matching skills in catalog order; every skill for an empty query.
        """
        if not query or not query.strip():
            return self.skills
        return tuple(s for s in self.skills if s.matches(query))

    def __len__(self) -> int:
        return len(self.skills)


def _require_str(item: dict, key: str, kind: str, source: str) -> str:
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{kind} entry without '{key}': {item!r}", source)
    return value.strip()


def _parse_skill(item, source: str) -> SkillRecord:
    if not isinstance(item, dict):
        raise CatalogError(f"Skill entry is not a mapping: {item!r}", source)
    return SkillRecord(
        name=_require_str(item, "name", "Skill", source),
        category=_require_str(item, "category", "Skill", source),
        description=str(item.get("description") or ""),
    )


def _parse_bundle(item, source: str) -> Bundle:
    if not isinstance(item, dict):
        raise CatalogError(f"Bundle entry is not a mapping: {item!r}", source)
    tag = _require_str(item, "tag", "Bundle", source)
    members = item.get("members")
    if not isinstance(members, list) or not members:
        raise CatalogError(f"Bundle '{tag}' has no members", source)
    return Bundle(
        tag=tag,
        label=str(item.get("label") or tag),
        description=str(item.get("description") or ""),
        members=tuple(str(m) for m in members),
        color=str(item.get("color") or "cyan"),
    )


def parse_catalog(raw: dict, source: str = "<memory>") -> Catalog:
    """Build a Catalog from already-parsed YAML data.

    Args:
        raw: Mapping with ``skills``, ``bundles`` and ``agents`` lists.
        source: Label used in error messages.

    Raises:
        CatalogError: If an entry is malformed.
        CatalogIntegrityError: If entries contradict each other.
    """
    if not isinstance(raw, dict):
        raise CatalogError("Catalog root must be a mapping", source)

    skills = [_parse_skill(item, source) for item in raw.get("skills") or []]
    bundles = [_parse_bundle(item, source) for item in raw.get("bundles") or []]
    agents = [str(a) for a in raw.get("agents") or []]

    return Catalog(skills=skills, bundles=bundles, agents=agents, source=source)


def load_catalog(catalog_path: Optional[Path] = None) -> Catalog:
    """Load and validate a catalog YAML file.

    Args:
        catalog_path: Path to the catalog file. Defaults to the
            ``skill_catalog.yaml`` shipped with this package.

    Returns:
        The validated Catalog.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        CatalogError: If the file is malformed or inconsistent.
    """
    path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML: {e}", str(path)) from e

    catalog = parse_catalog(raw, source=str(path))
    logger.info(
        "Loaded %d skills and %d bundles from %s",
        len(catalog.skills),
        len(catalog.bundles),
        path,
    )
    return catalog


@functools.lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The packaged catalog, loaded once per process."""
    return load_catalog()
