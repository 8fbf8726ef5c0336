"""Catalog and install planner for low-level-dev-skills."""

__version__ = "0.1.0"
