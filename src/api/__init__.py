"""Read-only HTTP API serving the cost report to the web viewer."""
