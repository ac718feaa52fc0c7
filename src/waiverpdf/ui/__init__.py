"""User interface: command-line entry points and helpers."""
