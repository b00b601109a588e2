"""
Configuration: keybindings, colours, border glyphs and file locations.

Settings live in ~/.config/yat/config.yaml. A missing file is created with
the defaults; sections present in the file override the defaults key by key.
"""
import copy
import curses
import logging
from pathlib import Path

import yaml

from .errors import MissingSaveLocation

APP_NAME = "yat"

DEFAULT_CONFIG = {
    "save_file": None,  # None means <config dir>/save.txt
    "log_file": "/tmp/yat.log",
    "keys": {
        "quit": "q",
        "back": "b",
        "save": "w",
        "add": "a",
        "edit": "e",
        "delete": "d",
        "task_up": "u",
        "task_down": "n",
        "up": "up",
        "down": "down",
        "focus": "enter",
        "complete": "space",
        "increase": ">",
        "decrease": "<",
        "sort": "s",
    },
    "colours": {
        "high": "red",
        "medium": "yellow",
        "low": "green",
        "complete": "blue",
        "title": "blue",
        "selection": "cyan",
        "prompt": "black on white",
        "warning": "red on white",
    },
    "borders": {
        "hline": "─",
        "vline": "│",
        "ulcorner": "┌",
        "urcorner": "┐",
        "llcorner": "└",
        "lrcorner": "┘",
    },
}

SECTIONS = ("keys", "colours", "borders")

NAMED_KEYS = {
    "up": curses.KEY_UP,
    "down": curses.KEY_DOWN,
    "left": curses.KEY_LEFT,
    "right": curses.KEY_RIGHT,
    "backspace": curses.KEY_BACKSPACE,
    "delete": curses.KEY_DC,
    "enter": "\n",
    "space": " ",
    "tab": "\t",
    "escape": "\x1b",
}

COLOUR_NAMES = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}


def config_dir() -> Path:
    try:
        return Path.home() / ".config" / APP_NAME
    except RuntimeError as e:
        raise MissingSaveLocation(f"Unable to locate home directory: {e}") from e


def default_config_file() -> Path:
    return config_dir() / "config.yaml"


def merge_config(user_config: dict) -> dict:
    config = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in user_config.items():
        if key in SECTIONS:
            if isinstance(value, dict):
                config[key].update(value)
            else:
                logging.warning(f"Ignoring config section '{key}': expected a mapping")
        else:
            config[key] = value
    return config


def load_config(config_file: Path = None) -> dict:
    if config_file is None:
        try:
            config_file = default_config_file()
        except MissingSaveLocation as e:
            logging.warning(f"{e}; using default configuration")
            return copy.deepcopy(DEFAULT_CONFIG)
    config_file = Path(config_file)
    if config_file.exists():
        try:
            with config_file.open("r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
            if not isinstance(user_config, dict):
                raise ValueError("top level must be a mapping")
            logging.info(f"Configuration read from {config_file}")
            return merge_config(user_config)
        except (OSError, yaml.YAMLError, ValueError) as e:
            logging.error(f"Error loading config file {config_file}: {e}")
            return copy.deepcopy(DEFAULT_CONFIG)
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with config_file.open("w", encoding="utf-8") as f:
            yaml.dump(DEFAULT_CONFIG, f, indent=2, allow_unicode=True, sort_keys=False)
        logging.info(f"Default config file created at {config_file}")
    except OSError as e:
        logging.error(f"Error creating default config file: {e}")
    return copy.deepcopy(DEFAULT_CONFIG)


def parse_key(name):
    """Turn a key name from the config into the event Window.getch returns.

    Returns None for names that are neither a single character nor one of
    NAMED_KEYS.
    """
    if not isinstance(name, str) or not name:
        return None
    if len(name) == 1:
        return name
    return NAMED_KEYS.get(name.lower())


def keybindings(config: dict) -> dict:
    """Map each command name to its key event."""
    bindings = {}
    for command, default in DEFAULT_CONFIG["keys"].items():
        name = config.get("keys", {}).get(command, default)
        key = parse_key(name)
        if key is None:
            logging.warning(f"Unknown key '{name}' for {command}; using '{default}'")
            key = parse_key(default)
        bindings[command] = key
    return bindings


def parse_colour(spec):
    """'red' or 'black on white' -> (fg, bg) curses colour numbers."""
    fg_name, _, bg_name = str(spec).lower().partition(" on ")
    fg = COLOUR_NAMES.get(fg_name.strip())
    bg = COLOUR_NAMES.get(bg_name.strip() or "default")
    if fg is None or bg is None:
        return None
    return fg, bg


def colour_scheme(config: dict) -> dict:
    scheme = {}
    for role, default in DEFAULT_CONFIG["colours"].items():
        spec = config.get("colours", {}).get(role, default)
        colours = parse_colour(spec)
        if colours is None:
            logging.warning(f"Unknown colour '{spec}' for {role}; using '{default}'")
            colours = parse_colour(default)
        scheme[role] = colours
    return scheme


def border_glyphs(config: dict) -> dict:
    glyphs = {}
    for part, default in DEFAULT_CONFIG["borders"].items():
        glyph = config.get("borders", {}).get(part, default)
        glyphs[part] = str(glyph) if glyph else default
    return glyphs


def resolve_save_path(arg: str = None, config: dict = None):
    """Pick the save file: the command-line path, then the config, then the default.

    Returns None when no location can be worked out.
    """
    config = config or DEFAULT_CONFIG
    if arg:
        path = Path(arg).expanduser()
        if not path.exists():
            logging.warning(f"Provided save file does not exist: {path}; starting a new list")
        return path
    if config.get("save_file"):
        path = Path(config["save_file"]).expanduser()
    else:
        try:
            path = config_dir() / "save.txt"
        except MissingSaveLocation as e:
            logging.warning(str(e))
            return None
    if not path.parent.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            logging.info(f"Created {path.parent}")
        except OSError as e:
            logging.error(f"Unable to create directory {path.parent}: {e}")
    if not path.exists():
        logging.info(f"No save file yet at {path}")
    return path
