"""LLM helper exports."""

from .guidance import GuidanceClient

__all__ = ["GuidanceClient"]
