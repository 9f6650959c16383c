"""Shared helpers and exceptions."""

from tripline.shared.exceptions import ToolError

__all__ = ["ToolError"]
