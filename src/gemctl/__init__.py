"""gemctl — Gemfile-driven package manager CLI."""

__version__ = "0.1.0"
