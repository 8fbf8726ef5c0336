"""CLI interface for the skill catalog.

Provides subcommands: list, categories, bundles, plan, browse.
Invoked via ``lowlevel-skills <command> [args]``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from pydantic import ValidationError

from lowlevel_skills.config import Settings, load_config
from lowlevel_skills.errors import (
    CatalogError,
    ClipboardWriteError,
    ConfigError,
    UnknownBundleError,
)
from lowlevel_skills.logging_config import configure_logging
from lowlevel_skills.store.catalog import load_catalog
from lowlevel_skills.store.models import (
    AllSkills,
    Bundle,
    BundleSelection,
    CategorySelection,
    ExplicitSelection,
    SelectionRequest,
    SkillRecord,
)
from lowlevel_skills.store.resolver import Resolver
from lowlevel_skills.ui.browser import BrowserController, run_interactive
from lowlevel_skills.ui.clipboard import copy_to_clipboard
from lowlevel_skills.ui.renderer import BrowserRenderer, CLIColors

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 3


def _load_settings(args: argparse.Namespace) -> Settings:
    """Load settings, applying command-line overrides.

    Raises:
        ConfigError: If the config file is unreadable or holds invalid values.
    """
    try:
        settings = load_config(args.config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if args.catalog:
        settings = settings.model_copy(update={"catalog_path": str(args.catalog)})
    if args.debug:
        settings = settings.model_copy(
            update={"logging": settings.logging.model_copy(update={"debug": True})}
        )
    return settings


def _setup_logging(settings: Settings) -> None:
    """Apply the logging settings.

    Raises:
        ConfigError: If the log file cannot be opened.
    """
    log_file = settings.logging.log_file
    try:
        configure_logging(
            debug=settings.logging.debug,
            log_file=Path(log_file) if log_file else None,
            max_bytes=settings.logging.max_bytes,
            backup_count=settings.logging.backup_count,
        )
    except OSError as e:
        raise ConfigError(f"Cannot open log file: {e}", log_file) from e


def _make_resolver(settings: Settings) -> Resolver:
    """Load the configured catalog and wrap it in a Resolver.

    Raises:
        ConfigError: If the catalog is missing or invalid.
    """
    catalog_path = Path(settings.catalog_path) if settings.catalog_path else None
    try:
        catalog = load_catalog(catalog_path)
    except (FileNotFoundError, CatalogError) as e:
        raise ConfigError(str(e)) from e
    return Resolver(catalog, source=settings.source, installer=settings.installer)


def _use_color(mode: str) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


# ── Formatting helpers ──────────────────────────────────────────────


def _format_skill(skill: SkillRecord) -> str:
    """Format a single skill for display.

    Args:
        skill: The catalog entry.

    Returns:
        Formatted string.
    """
    lines = [f"  {skill.name} [{skill.category}]"]
    if skill.description:
        lines.append(f"    {skill.description}")
    return "\n".join(lines)


def _format_bundle(bundle: Bundle, command: str) -> str:
    """Format a bundle and its install command for display.

    Args:
        bundle: The bundle definition.
        command: Resolved install command.

    Returns:
        Formatted string.
    """
    lines = [f"  {bundle.tag}: {bundle.label}"]
    if bundle.description:
        lines.append(f"    {bundle.description}")
    lines.append(f"    Skills: {len(bundle.members)}")
    lines.append(f"    $ {command}")
    return "\n".join(lines)


# ── Subcommand handlers ────────────────────────────────────────────


def cmd_list(args: argparse.Namespace, settings: Settings, resolver: Resolver) -> int:
    """List skills, optionally narrowed by category and keywords."""
    catalog = resolver.catalog
    skills = catalog.skills_in(args.category) if args.category else catalog.list_skills()
    query = " ".join(args.search or [])
    if query.strip():
        skills = tuple(s for s in skills if s.matches(query))

    if not skills:
        print("No skills found.")
        return EXIT_SUCCESS

    print(f"Skills ({len(skills)}):\n")
    for skill in skills:
        print(_format_skill(skill))
        print()
    return EXIT_SUCCESS


def cmd_categories(args: argparse.Namespace, settings: Settings, resolver: Resolver) -> int:
    """List categories with their skill counts."""
    catalog = resolver.catalog
    for category in catalog.list_categories():
        print(f"  {category} ({len(catalog.skills_in(category))})")
    return EXIT_SUCCESS


def cmd_bundles(args: argparse.Namespace, settings: Settings, resolver: Resolver) -> int:
    """List bundles with their install commands."""
    bundles = resolver.catalog.list_bundles()
    if not bundles:
        print("No bundles defined.")
        return EXIT_SUCCESS

    print(f"Bundles ({len(bundles)}):\n")
    for bundle in bundles:
        command = resolver.resolve(BundleSelection(bundle.tag)).command
        print(_format_bundle(bundle, command))
        print()
    return EXIT_SUCCESS


def _request_from_args(args: argparse.Namespace) -> SelectionRequest:
    if args.all:
        return AllSkills()
    if args.category:
        return CategorySelection(args.category)
    if args.bundle:
        return BundleSelection(args.bundle)
    return ExplicitSelection(args.skill)


def cmd_plan(args: argparse.Namespace, settings: Settings, resolver: Resolver) -> int:
    """Resolve a selection and print its install command."""
    try:
        plan = resolver.resolve(_request_from_args(args))
    except UnknownBundleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    for warning in plan.warnings:
        print(f"Warning: {warning.message}", file=sys.stderr)

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    elif plan.command:
        print(plan.command)

    if plan.is_empty:
        print("No skills selected.", file=sys.stderr)
        return EXIT_ERROR

    if args.copy:
        try:
            copy_to_clipboard(plan.command)
        except ClipboardWriteError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        print("Copied to clipboard.", file=sys.stderr)
    return EXIT_SUCCESS


def cmd_browse(args: argparse.Namespace, settings: Settings, resolver: Resolver) -> int:
    """Open the interactive browser."""
    colors = CLIColors() if _use_color(args.color or settings.ui.color) else CLIColors.plain()
    renderer = BrowserRenderer(resolver.source, branch=settings.branch, colors=colors)
    controller = BrowserController(
        resolver,
        renderer,
        copied_reset_seconds=settings.ui.copied_reset_seconds,
    )
    return run_interactive(controller)


# ── Argument parser ─────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="lowlevel-skills",
        description="Low-level dev skills: browse the catalog and plan installs.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file path (default: config/config.yaml).",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Catalog YAML to use instead of the packaged one.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )

    sub = parser.add_subparsers(dest="command")

    # list
    p_list = sub.add_parser("list", help="List skills in the catalog")
    p_list.add_argument("--category", "-c", default=None, help="Only this category")
    p_list.add_argument("--search", "-s", nargs="+", default=None, help="Search terms")

    # categories
    sub.add_parser("categories", help="List categories")

    # bundles
    sub.add_parser("bundles", help="List bundles and their install commands")

    # plan
    p_plan = sub.add_parser("plan", help="Print the install command for a selection")
    selection = p_plan.add_mutually_exclusive_group(required=True)
    selection.add_argument("--all", "-a", action="store_true", help="Every skill")
    selection.add_argument("--category", "-c", default=None, help="Skills in a category")
    selection.add_argument("--bundle", "-b", default=None, help="Skills in a bundle")
    selection.add_argument("--skill", nargs="+", default=None, metavar="NAME", help="Skills by name")
    p_plan.add_argument("--json", "-j", action="store_true", help="Output the plan as JSON")
    p_plan.add_argument("--copy", action="store_true", help="Copy the command to the clipboard")

    # browse
    p_browse = sub.add_parser("browse", help="Browse the catalog interactively")
    p_browse.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default=None,
        help="Colorize output (default: from config).",
    )

    return parser


HANDLERS = {
    "list": cmd_list,
    "categories": cmd_categories,
    "bundles": cmd_bundles,
    "plan": cmd_plan,
    "browse": cmd_browse,
}


def run_cli(argv: List[str] | None = None) -> int:
    """Entry point for the CLI.

    Args:
        argv: Command line arguments. None = sys.argv.

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        settings = _load_settings(args)
        _setup_logging(settings)
        resolver = _make_resolver(settings)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    handler = HANDLERS.get(args.command)
    if handler:
        return handler(args, settings, resolver)

    parser.print_help()
    return EXIT_ERROR


def main() -> None:
    """Console script entry point."""
    sys.exit(run_cli())
