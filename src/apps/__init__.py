"""Command-line drivers (spirolateral, tariff); thin wrappers live in scripts/."""
