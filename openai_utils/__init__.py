"""OpenAI client construction shared by the guidance and speech services."""

from .client import create_client

__all__ = ["create_client"]
