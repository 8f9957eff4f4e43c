"""CLI user interface helpers."""
