"""Command-line helper scripts."""
