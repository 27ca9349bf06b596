"""
todo-sync: local task tracker that mirrors new tasks to an Appwrite collection.

Subpackages:
- tasks/: models, SQLite store, sync routine, high-level write paths
- remote/: Appwrite REST client and the offline stand-in
- core/: ports (Protocols), errors, app state
- cli/, connectors/: composition root and the interactive console
"""

__version__ = "0.1.0"
