# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
read with python-dotenv). This file exists to make the repo self-documenting without opening
the source of taskkeeper/config.py.
"""

ENV_VARS = {
    # App / logging
    "TASKKEEPER_APP_NAME": "App display name (default: taskkeeper).",
    "TASKKEEPER_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    "TASKKEEPER_LOG_DIR": "Directory for taskkeeper.log (default: .local/taskkeeper).",
    # Data files
    "TASKKEEPER_DATA_DIR": "Directory holding tasks.json and users.json (default: working directory).",
    "TASKKEEPER_TASKS_PATH": "Tasks JSON path (default: <data_dir>/tasks.json).",
    "TASKKEEPER_USERS_PATH": "Users JSON path (default: <data_dir>/users.json).",
    # Auth
    "TASKKEEPER_BCRYPT_ROUNDS": "bcrypt cost factor for new password hashes, 4..31 (default: 12).",
}
