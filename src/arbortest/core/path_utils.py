"""
Display path helpers for arbortest.

Paths are tuples of group names followed by a test name or hook identity.
They are for display only and may repeat across a tree.
"""

ROOT_DISPLAY_NAME = "<root>"


def format_path(names: tuple[str, ...]) -> str:
    """Join group and test names into a display path."""
    return " > ".join(names) if names else ROOT_DISPLAY_NAME
