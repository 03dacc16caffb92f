import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .colors import ConsoleColor, parse_color
from .console import console
from .errors import InvalidColorValue

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "DEFAULT_FOREGROUND": "Gray",
    "DEFAULT_BACKGROUND": "Black",
    "COLOR_SYSTEM": "auto",
    "FORCE_TERMINAL": "false",
    "LINE_ENDING": "lf",
}

COLOR_SYSTEMS = ("auto", "standard", "256", "truecolor", "windows", "none")
LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n"}

# File Paths
ADVCONSOLE_DIR = Path(os.getenv("ADVCONSOLE_DIR", str(Path.home() / ".advconsole")))
CONFIG_FILE = Path(os.getenv("ADVCONSOLE_CONFIG_FILE", str(ADVCONSOLE_DIR / "config.json")))


def ensure_config_dir():
    """Ensure the advconsole config directory exists"""
    if not ADVCONSOLE_DIR.exists():
        try:
            ADVCONSOLE_DIR.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            console.print(
                f"[yellow]Warning: Could not create directory {ADVCONSOLE_DIR}: {e}[/yellow]"
            )


def load_config(filepath: Path | None = None) -> dict[str, Any]:
    """Load configuration from file"""
    filepath = filepath or CONFIG_FILE
    if filepath.exists():
        try:
            with open(filepath) as f:
                config: dict[str, Any] = json.load(f)
                return config
        except Exception as e:
            console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def save_config(config: dict[str, Any], filepath: Path | None = None) -> bool:
    """Save configuration to file"""
    try:
        if filepath is None:
            ensure_config_dir()
            filepath = CONFIG_FILE
        with open(filepath, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except Exception as e:
        console.print(f"[red]Error saving config file: {e}[/red]")
        return False


def get_setting(key: str, default: str, config: dict[str, Any] | None = None) -> str:
    """Get setting with priority: Env Var > Config File > Default

    Pass an already loaded `config` to avoid re-reading the file per key.
    """
    # 1. Environment Variable
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    if config is None:
        config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


def get_bool_setting(key: str, default: bool, config: dict[str, Any] | None = None) -> bool:
    """Get boolean setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default).lower(), config)
    return value.lower() in ("true", "1", "yes", "on")


def get_color_setting(
    key: str, default: ConsoleColor, config: dict[str, Any] | None = None
) -> ConsoleColor:
    """Get a ConsoleColor setting by name or number, falling back on bad values"""
    value = get_setting(key, default.name, config)
    try:
        return parse_color(int(value) if value.strip().isdigit() else value)
    except InvalidColorValue:
        console.print(
            f"[yellow]Warning: Invalid color value for {key}: {value}, "
            f"using default {default.name}[/yellow]"
        )
        return default


def get_choice_setting(
    key: str, default: str, choices, config: dict[str, Any] | None = None
) -> str:
    """Get a setting restricted to `choices` (case-insensitive)"""
    value = get_setting(key, default, config).strip().lower()
    if value not in choices:
        console.print(
            f"[yellow]Warning: Invalid value for {key}: {value}, using default {default}[/yellow]"
        )
        return default
    return value


def get_default_foreground(config: dict[str, Any] | None = None) -> ConsoleColor:
    return get_color_setting("DEFAULT_FOREGROUND", ConsoleColor.GRAY, config)


def get_default_background(config: dict[str, Any] | None = None) -> ConsoleColor:
    return get_color_setting("DEFAULT_BACKGROUND", ConsoleColor.BLACK, config)


def get_color_system(config: dict[str, Any] | None = None) -> str | None:
    """Rich color_system argument; "none" disables color entirely"""
    value = get_choice_setting(
        "COLOR_SYSTEM", DEFAULT_CONFIG["COLOR_SYSTEM"], COLOR_SYSTEMS, config
    )
    return None if value == "none" else value


def get_line_terminator(config: dict[str, Any] | None = None) -> str:
    value = get_choice_setting("LINE_ENDING", DEFAULT_CONFIG["LINE_ENDING"], LINE_ENDINGS, config)
    return LINE_ENDINGS[value]


def get_force_terminal(config: dict[str, Any] | None = None) -> bool:
    return get_bool_setting("FORCE_TERMINAL", False, config)
