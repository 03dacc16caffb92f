"""advconsole - a console wrapper with scoped colored output"""

from .backend import RichBackend, TerminalBackend
from .colors import ConsoleColor, parse_color
from .config import (
    ADVCONSOLE_DIR,
    CONFIG_FILE,
    DEFAULT_CONFIG,
    ensure_config_dir,
    get_bool_setting,
    get_color_setting,
    get_setting,
    load_config,
    save_config,
)
from .errors import BackendIOError, ConsoleError, FormatError, InvalidColorValue
from .formatting import (
    CharRange,
    Composite,
    Text,
    WriteRequest,
    as_request,
    format_composite,
    to_text,
)
from .terminal import AdvConsole, create_backend, get_console
from .writer import ColorScope, ScopedColorWriter

__all__ = [
    # Backend
    "RichBackend",
    "TerminalBackend",
    # Colors
    "ConsoleColor",
    "parse_color",
    # Config
    "ADVCONSOLE_DIR",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "ensure_config_dir",
    "get_bool_setting",
    "get_color_setting",
    "get_setting",
    "load_config",
    "save_config",
    # Errors
    "BackendIOError",
    "ConsoleError",
    "FormatError",
    "InvalidColorValue",
    # Formatting
    "CharRange",
    "Composite",
    "Text",
    "WriteRequest",
    "as_request",
    "format_composite",
    "to_text",
    # Console
    "AdvConsole",
    "create_backend",
    "get_console",
    # Writer
    "ColorScope",
    "ScopedColorWriter",
]
