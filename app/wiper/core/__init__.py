"""Core infrastructure: configuration, paths, and theming."""
