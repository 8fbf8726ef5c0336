"""Resolve a skill selection into an install plan and ``skills`` command."""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from lowlevel_skills.errors import UnknownSkillWarning
from lowlevel_skills.store.catalog import Catalog
from lowlevel_skills.store.models import (
    AllSkills,
    BundleSelection,
    CategorySelection,
    ExplicitSelection,
    InstallPlan,
    SelectionRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "mohitmishra786/low-level-dev-skills"
DEFAULT_INSTALLER = "npx skills add"


def dedupe(names: Iterable[str]) -> Tuple[str, ...]:
    """Drop repeated names, keeping the first occurrence of each."""
    return tuple(dict.fromkeys(names))


class Resolver:
    """Turns SelectionRequests into InstallPlans against one catalog.

    Resolution is pure: the same request always produces the same plan.

    Args:
        catalog: The catalog to resolve against.
        source: ``<org>/<repo>`` slug passed to the skills CLI.
        installer: Command prefix that installs from a source.
    """

    def __init__(
        self,
        catalog: Catalog,
        source: str = DEFAULT_SOURCE,
        installer: str = DEFAULT_INSTALLER,
    ) -> None:
        self._catalog = catalog
        self._source = source
        self._installer = installer

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def source(self) -> str:
        return self._source

    def resolve(self, request: SelectionRequest) -> InstallPlan:
        """Resolve a selection request.

        Args:
            request: One of AllSkills, CategorySelection, BundleSelection,
                or ExplicitSelection.

        Returns:
            The InstallPlan for the request.

        Raises:
            UnknownBundleError: If a BundleSelection names a missing bundle.
            TypeError: If ``request`` is not a known selection type.
        """
        if isinstance(request, AllSkills):
            names = dedupe(s.name for s in self._catalog.list_skills())
            return InstallPlan(names=names, command=self.render_command(names, all_skills=True))

        if isinstance(request, CategorySelection):
            names = dedupe(s.name for s in self._catalog.skills_in(request.category))
            if not names:
                logger.debug("Category '%s' has no skills", request.category)
            return InstallPlan(names=names, command=self.render_command(names))

        if isinstance(request, BundleSelection):
            bundle = self._catalog.find_bundle(request.tag)
            names = dedupe(bundle.members)
            return InstallPlan(names=names, command=self.render_command(names))

        if isinstance(request, ExplicitSelection):
            return self._resolve_explicit(request.names)

        raise TypeError(f"Unsupported selection request: {request!r}")

    def resolve_names(self, names: Iterable[str]) -> InstallPlan:
        """Resolve a ``--skill`` argument list."""
        return self.resolve(ExplicitSelection(names))

    def _resolve_explicit(self, requested: Tuple[str, ...]) -> InstallPlan:
        known = set()
        warnings: List[UnknownSkillWarning] = []
        for name in dedupe(requested):
            if self._catalog.has_skill(name):
                known.add(name)
            else:
                logger.warning("Ignoring unknown skill '%s'", name)
                warnings.append(UnknownSkillWarning(name))

        names = tuple(s.name for s in self._catalog.list_skills() if s.name in known)
        return InstallPlan(
            names=names,
            command=self.render_command(names),
            warnings=tuple(warnings),
        )

    def render_command(self, names: Tuple[str, ...], all_skills: bool = False) -> str:
        """Format the skills CLI command for a list of names.

        Args:
            names: Skill names to pass to ``--skill``.
            all_skills: Emit ``--all`` instead of a name list.

        Returns:
            The command string, or ``""`` when there is nothing to install.
        """
        prefix = f"{self._installer} {self._source}"
        if all_skills:
            return f"{prefix} --all"
        if not names:
            return ""
        return f"{prefix} --skill {' '.join(names)}"
