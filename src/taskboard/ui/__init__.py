"""
Task list UI: framework-free view model (``state``, ``forms``, ``preview``)
and its flet rendering (``app``).
"""
