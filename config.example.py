# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACKER_APP_NAME": "App display name (default: tasktracker).",
    "TASKTRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Front-ends
    "TASKTRACKER_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    "TASKTRACKER_API_ENABLED": "Serve the HTTP API (true/false, default: true).",
    "TASKTRACKER_API_HOST": "HTTP bind address (default: 127.0.0.1).",
    "TASKTRACKER_API_PORT": "HTTP port (default: $PORT or 5001).",
    "TASKTRACKER_CORS_ORIGINS": "Comma/space separated browser origins (default: *).",
    # LLM (OpenAI-compatible)
    "TASKTRACKER_OPENAI_API_KEY": (
        "API key; enables the model-based transcript parser. OPENAI_API_KEY is accepted too."
    ),
    "TASKTRACKER_OPENAI_BASE_URL": "Endpoint (default: https://api.openai.com/v1).",
    "TASKTRACKER_LLM_MODEL": "Model name (default: gpt-3.5-turbo).",
    "TASKTRACKER_LLM_MAX_TOKENS": "Response length budget (default: 500).",
    "TASKTRACKER_LLM_TEMPERATURE": "Decoding temperature (default: 0.3).",
    "TASKTRACKER_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TASKTRACKER_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 25).",
    # Paths (gitignored)
    "TASKTRACKER_DATA_DIR": "Local data directory (default: .local/tasktracker).",
    "TASKTRACKER_TASKS_DB_PATH": "JSON task file (default: <data_dir>/tasks.json).",
}
