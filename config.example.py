# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKTRACK_DATA_DIR": "Local data directory for tasktrack.log (default: .local/tasktrack).",
    # Connectors
    "TASKTRACK_CONSOLE_ENABLED": "Enable console connector (true/false).",
    # Search
    "TASKTRACK_SEARCH_DEBOUNCE_MS": "Quiet period before a search term applies (default: 500).",
    # Notifications
    "TASKTRACK_NOTIFY_INTERVAL_SECONDS": "Pending-task scan interval (default: 1200 = 20 minutes).",
    "TASKTRACK_NOTIFICATION_PREVIEW": "How many recent notifications /log shows (default: 3).",
    "TASKTRACK_CLEAR_LOG_ON_LOGOUT": "Drop the notification log on logout (default: false).",
}
