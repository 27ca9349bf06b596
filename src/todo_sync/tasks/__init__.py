"""
Task subsystem.

Components:
- task_models.py: data structures (TaskRecord, UserIdentity, SyncReport)
- task_store.py: SQLite-backed storage + query/update helpers
- task_sync.py: one-way push of unlinked tasks to the remote store
- task_api.py: small high-level helpers used by the console
"""
