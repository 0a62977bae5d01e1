"""Version information for shared-ssh."""

__version__ = "0.1.0"

# Config file location override - set SHAREDSSH_CONFIG or pass --config
CONFIG_ENV_VAR = "SHAREDSSH_CONFIG"
