# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real session files. Everything local lives under TASKDESK_DATA_DIR (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote API
    "TASKDESK_API_BASE_URL": "Base URL of the task API (default: http://localhost:3000).",
    "TASKDESK_AUTH_URL": "Auth endpoints base (default: <base>/auth).",
    "TASKDESK_TASKS_URL": "Tasks collection URL (default: <base>/tasks).",
    "TASKDESK_HTTP_TIMEOUT_SECONDS": "Read/write timeout per request (default: 10).",
    "TASKDESK_HTTP_CONNECT_TIMEOUT_SECONDS": "Connect timeout per request (default: 5).",
    # Paths (gitignored)
    "TASKDESK_DATA_DIR": "Local data directory (default: .local/taskdesk).",
    "TASKDESK_SESSION_DIR": "Where the session record is stored (default: <data_dir>/session).",
    "TASKDESK_SESSION_KEY": "Storage key of the session record (default: user).",
}
