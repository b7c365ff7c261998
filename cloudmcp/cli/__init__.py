"""Command-line entry point for cloudmcp."""
