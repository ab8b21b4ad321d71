"""Slack app that answers @mentions with acronym definitions."""

__version__ = "0.1.0"
