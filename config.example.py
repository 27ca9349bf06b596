# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets (the Appwrite JWT / API key belong in .env, which is gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_SYNC_APP_NAME": "App display name (default: todo-sync).",
    "TODO_SYNC_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_SYNC_DATA_DIR": "Local data directory (default: .local/todo-sync).",
    "TODO_SYNC_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Appwrite (all three of endpoint/project/database are needed, else offline mode)
    "TODO_SYNC_APPWRITE_ENDPOINT": "Appwrite API endpoint, e.g. https://cloud.appwrite.io/v1.",
    "TODO_SYNC_APPWRITE_PROJECT_ID": "Appwrite project id.",
    "TODO_SYNC_APPWRITE_DATABASE_ID": "Appwrite database id.",
    "TODO_SYNC_APPWRITE_COLLECTION_ID": "Collection that receives task documents (default: tasks).",
    "TODO_SYNC_APPWRITE_JWT": "JWT of the signed-in user (documents are tagged with this user's id).",
    "TODO_SYNC_APPWRITE_API_KEY": "Server API key, used only when no JWT is set (needs TODO_SYNC_APPWRITE_USER_ID).",
    "TODO_SYNC_APPWRITE_USER_ID": "User id written into pushed documents when syncing with an API key.",
    # Sync
    "TODO_SYNC_REMOTE_TIMEOUT_SECONDS": "Timeout for one remote call (default: 10, min 1).",
    "TODO_SYNC_SYNC_ON_START": "Run one sync pass at startup (default: true).",
}
