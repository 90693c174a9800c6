"""Command-level services shared by the CLI."""
