"""TaskWiz: an interactive, menu-driven task manager."""

__version__ = "0.1.0"
