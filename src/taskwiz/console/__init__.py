"""
Console subsystem.

Components:
- terminal.py: line-oriented prompt/response primitives
- tables.py: plain-text table rendering for listings
- field_editor.py: per-field prompt/validate/retry workflows
- session.py: the menu loop and its state machine
"""
