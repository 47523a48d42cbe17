"""gitglass — a git working tree as structured, UI-friendly data."""

__version__ = "0.1.0"
