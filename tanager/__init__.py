# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Tanager - open today's journal entry in your editor."""

# Also bump in pyproject.toml
__version__ = "0.1.0"
