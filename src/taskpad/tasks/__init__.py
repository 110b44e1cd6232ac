"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskView, TaskEvent)
- task_store.py: in-memory ordered task list + single global edit mode
- codec.py: JSON blob <-> Task records
- kv_storage.py: SQLite-backed key-value storage
- persistence.py: load/save gateway and the single-flight SaveQueue
"""
