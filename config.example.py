# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
The user-editable plugin setting lives in <data_dir>/data.json and is changed with
`hamster-bridge setting VALUE` or `/setting VALUE` in the shell.
"""

ENV_VARS = {
    # App / logging
    "HAMSTER_BRIDGE_APP_NAME": "App display name (default: hamster-bridge).",
    "HAMSTER_BRIDGE_LOG_LEVEL": "Log file level (default: INFO).",
    # Paths (gitignored)
    "HAMSTER_BRIDGE_DATA_DIR": "Local data directory (default: .local/hamster-bridge).",
    "HAMSTER_BRIDGE_SETTINGS_PATH": "Plugin settings JSON (default: <data_dir>/data.json).",
    # Hamster D-Bus endpoint
    "HAMSTER_BRIDGE_BUS_NAME": "Well-known bus name (default: org.gnome.Hamster).",
    "HAMSTER_BRIDGE_OBJECT_PATH": "Object path (default: /org/gnome/Hamster).",
    "HAMSTER_BRIDGE_INTERFACE": "Interface name (default: org.gnome.Hamster).",
    "HAMSTER_BRIDGE_CONNECT_ON_LOAD": "Connect to Hamster when the plugin loads (true/false, default: true).",
}
