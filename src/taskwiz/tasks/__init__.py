"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskField)
- task_store.py: SQLite-backed storage (list/create/get/update/delete)
- validators.py: pure field checks
- selection.py: listing snapshots and ordinal resolution
"""
