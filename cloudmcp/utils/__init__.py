"""Utility helpers for cloudmcp."""
