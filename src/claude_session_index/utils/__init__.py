"""Helpers for transcript content, paths and timestamps."""
