"""
Taskboard: a minimal to-do list manager.

The FastAPI application lives in ``taskboard.main`` (``taskboard.main.app``),
the flet UI in ``taskboard.ui.app``.
"""

__version__ = "0.1.0"
