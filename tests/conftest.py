import logging
from pathlib import Path

import pytest
import yaml

from lowlevel_skills.store.catalog import default_catalog, parse_catalog
from lowlevel_skills.store.resolver import Resolver

FIXTURE_CATALOG = {
    "skills": [
        {"name": "gcc", "category": "compilers", "description": "GCC flags"},
        {"name": "clang", "category": "compilers", "description": "Clang tooling"},
        {"name": "gdb", "category": "debuggers", "description": "GDB sessions"},
        {"name": "lldb", "category": "debuggers", "description": "LLDB commands"},
        {"name": "rust-ffi", "category": "rust", "description": "bindgen, cbindgen"},
    ],
    "bundles": [
        {
            "tag": "debug",
            "label": "Debugging",
            "description": "Debuggers only",
            "color": "red",
            "members": ["lldb", "gdb", "lldb"],
        },
        {
            "tag": "mixed",
            "label": "Mixed",
            "members": ["rust-ffi", "gcc"],
        },
    ],
    "agents": ["Claude Code", "Cursor"],
}


@pytest.fixture
def catalog_data() -> dict:
    """A fresh copy of the fixture catalog data."""
    return yaml.safe_load(yaml.safe_dump(FIXTURE_CATALOG))


@pytest.fixture
def tmp_catalog(tmp_path: Path, catalog_data: dict) -> Path:
    """Write the fixture catalog to a temporary YAML file."""
    path = tmp_path / "catalog.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(catalog_data, f)
    return path


@pytest.fixture
def fixture_catalog(catalog_data: dict):
    return parse_catalog(catalog_data, source="fixture")


@pytest.fixture
def fixture_resolver(fixture_catalog) -> Resolver:
    return Resolver(fixture_catalog, source="acme/skills")


@pytest.fixture
def resolver() -> Resolver:
    """Resolver over the packaged catalog."""
    return Resolver(default_catalog())


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo handler changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
