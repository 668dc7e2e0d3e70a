import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_FILE = PACKAGE_ROOT / "config" / "config.yaml"
EXAMPLE_CONFIG_FILE = PACKAGE_ROOT / "config" / "config.example.yaml"

API_KEY_ENV = "API_KEY"


def get_default_config() -> Dict[str, Any]:
    """Get default configuration"""
    return {
        # Model
        "model_id": "gemini-2.5-flash",
        "instruction_version": "v1",

        # Logging
        "log_file": "logs/app.log",
        "log_level": "INFO",
        "log_console": False,

        # HTTP service
        "server_host": "0.0.0.0",
        "server_port": 8000,
        "cors_origins": ["*"],
    }


_ENV_OVERRIDES = {
    "VEO_MODEL_ID": ("model_id", str),
    "VEO_INSTRUCTION_VERSION": ("instruction_version", str),
    "VEO_LOG_LEVEL": ("log_level", str),
    "VEO_LOG_FILE": ("log_file", str),
    "VEO_SERVER_PORT": ("server_port", int),
}


def init_env(env_file: Optional[str] = None) -> Optional[str]:
    """
    Load a .env file into the process environment without overriding
    variables that are already set. Returns the path that was loaded, if any.
    """
    candidates = [Path(env_file)] if env_file else [PACKAGE_ROOT / ".env", PACKAGE_ROOT.parent / ".env"]
    env_path = next((p for p in candidates if p.exists()), None)
    if env_path is None:
        return None
    load_dotenv(dotenv_path=str(env_path), override=False)
    return str(env_path)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file, fill in defaults for missing keys
    and apply VEO_* environment overrides.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_FILE
    if not config_path and not path.exists():
        path = EXAMPLE_CONFIG_FILE

    config: Dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    elif config_path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    defaults = get_default_config()
    for key, value in defaults.items():
        if key not in config:
            config[key] = value

    for env_name, (key, cast) in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw:
            config[key] = cast(raw)

    return config


def get_api_key() -> Optional[str]:
    """The credential is read at call time and never cached."""
    return os.getenv(API_KEY_ENV) or None
