# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "Title shown above the task list (default: taskpad).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKPAD_DATA_DIR": "Local data directory for the database and taskpad.log (default: .local/taskpad).",
    "TASKPAD_DB_PATH": "SQLite key-value database path (default: <data_dir>/taskpad.sqlite3).",
    # Persistence
    "TASKPAD_STORAGE_KEY": "Key the whole task list is saved under (default: tasks).",
    # Console
    "TASKPAD_FADE_MS": "Fade-in / fade-out duration in milliseconds, 0 disables (default: 500).",
    "TASKPAD_COLOR": "ANSI styling for completed / fading rows (true/false, default: true).",
}
