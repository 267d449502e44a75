"""Monoforge -- monorepo app scaffolding and project-context synthesis."""

__version__ = "0.1.0"
