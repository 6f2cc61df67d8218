"""Utility helpers for tourquery."""
