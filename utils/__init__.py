"""Utility helpers for the legal filing assistant."""
