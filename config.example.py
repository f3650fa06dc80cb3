# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TICKCRON_APP_NAME": "App display name used in logs (default: tickcron).",
    "TICKCRON_LOG_LEVEL": "Console logging level (default: INFO).",
    "TICKCRON_LOG_DIR": "Directory for tickcron.log (default: .local/tickcron).",
    "TICKCRON_LOG_TO_FILE": "Write the full debug log file (true/false, default: true).",
    # Scheduler
    "TICKCRON_HEARTBEAT_RULES": (
        "';'-separated rules for the CLI heartbeat task, e.g. '00;30' (default: 00). "
        "Each rule is 'ss [mm [hh [DD [MM [YYYY]]]]]'."
    ),
    "TICKCRON_STOP_JOIN_TIMEOUT": "Seconds to wait for the scheduler thread on shutdown (default: 5).",
}
