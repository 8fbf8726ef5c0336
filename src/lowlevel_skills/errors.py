"""Error types for the skill catalog.

These exceptions provide consistent error handling across the catalog,
resolver, browser and CLI. Each carries a human-readable message and a
``details`` dict for structured output.
"""

from typing import Iterable, Optional


def _with_available(message: str, available: Optional[list]) -> str:
    """Append a short "Available: ..." hint to a message."""
    if not available:
        return message
    message += f". Available: {', '.join(available[:5])}"
    if len(available) > 5:
        message += f" (+{len(available) - 5} more)"
    return message


class SkillsError(Exception):
    """Base exception for all catalog errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SkillNotFoundError(SkillsError):
    """Raised when a skill name is not in the catalog."""

    def __init__(self, name: str, available: list = None):
        details = {"name": name}
        if available:
            details["available"] = available
        super().__init__(_with_available(f"Skill not found: {name}", available), details)
        self.name = name


class UnknownBundleError(SkillsError):
    """Raised when a bundle tag does not exist.

    Fatal for the single resolve call that asked for it.
    """

    def __init__(self, tag: str, available: list = None):
        details = {"tag": tag}
        if available:
            details["available"] = available
        super().__init__(_with_available(f"Unknown bundle: {tag}", available), details)
        self.tag = tag


class ClipboardWriteError(SkillsError):
    """Raised when the system clipboard rejects a write."""

    def __init__(self, reason: str):
        super().__init__(f"Could not copy to clipboard: {reason}", {"reason": reason})
        self.reason = reason


class CatalogError(SkillsError):
    """Raised when a catalog file is malformed."""

    def __init__(self, message: str, source: str = None):
        details = {"source": source} if source else {}
        if source:
            message = f"{message} (in {source})"
        super().__init__(message, details)
        self.source = source


class CatalogIntegrityError(CatalogError):
    """Raised when catalog contents contradict each other.

    Duplicate skill names, duplicate bundle tags and bundles that reference
    missing skills all land here. This is a programming error in the
    catalog table, not something callers recover from.
    """

    def __init__(self, problems: Iterable[str], source: str = None):
        self.problems = list(problems)
        super().__init__("Catalog integrity check failed: " + "; ".join(self.problems), source)
        self.details["problems"] = self.problems


class ConfigError(SkillsError):
    """Raised when settings cannot be loaded or applied.

    The CLI reports these with exit code 3.
    """

    def __init__(self, message: str, path: str = None):
        details = {"path": path} if path else {}
        if path:
            message = f"{message} (in {path})"
        super().__init__(message, details)
        self.path = path


class UnknownSkillWarning(UserWarning):
    """A requested skill name that is not in the catalog.

    Collected on the install plan instead of being raised, so that one bad
    name does not block installing the rest.
    """

    def __init__(self, name: str):
        super().__init__(f"Unknown skill ignored: {name}")
        self.name = name

    @property
    def message(self) -> str:
        return str(self)

    def __eq__(self, other) -> bool:
        return isinstance(other, UnknownSkillWarning) and other.name == self.name

    def __hash__(self) -> int:
        return hash(("UnknownSkillWarning", self.name))

    def __repr__(self) -> str:
        return f"UnknownSkillWarning({self.name!r})"
