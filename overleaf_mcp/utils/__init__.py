"""Utility modules for the Overleaf MCP system.

This package contains shared utility functions:
- validation.py: Path guard, boundary caps and commit-message sanitizer
"""
