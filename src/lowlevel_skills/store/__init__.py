"""Skill store: catalog browsing and install planning."""

from lowlevel_skills.store.catalog import Catalog, default_catalog, load_catalog
from lowlevel_skills.store.models import (
    AllSkills,
    Bundle,
    BundleSelection,
    CategorySelection,
    ExplicitSelection,
    InstallPlan,
    SelectionRequest,
    SkillRecord,
)
from lowlevel_skills.store.resolver import Resolver

__all__ = [
    "AllSkills",
    "Bundle",
    "BundleSelection",
    "Catalog",
    "CategorySelection",
    "ExplicitSelection",
    "InstallPlan",
    "Resolver",
    "SelectionRequest",
    "SkillRecord",
    "default_catalog",
    "load_catalog",
]
