"""
Command-line entry point: settings, logging, the save file and the curses session.
"""
import argparse
import curses
import locale
import logging
import logging.handlers
import sys

from . import __version__
from .codec import load_tree
from .config import load_config, resolve_save_path
from .navigation import NavigationController
from .todo import TaskNode
from .tui import run


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="yat",
        description="Terminal todo list manager with nested sub-tasks.",
    )
    parser.add_argument("save_file", nargs="?", help="save file to load and write (default: ~/.config/yat/save.txt)")
    parser.add_argument("--config", help="alternative config.yaml")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging(config: dict, pending=()):
    """Send log records to the configured file, then replay any held back."""
    logging.basicConfig(filename=config["log_file"], level=logging.DEBUG, force=True,
                        format='%(asctime)s [%(levelname)s] %(message)s')
    root = logging.getLogger()
    for record in pending:
        root.handle(record)


def build_controller(save_file=None, config: dict = None) -> NavigationController:
    save_path = resolve_save_path(save_file, config)
    if save_path is not None and save_path.exists():
        root = load_tree(save_path)
    else:
        root = TaskNode()
    return NavigationController(root, save_path)


def main(argv=None):
    args = parse_args(argv)
    # Config loading logs before the log file is known; hold those records.
    held = logging.handlers.MemoryHandler(capacity=1000, flushLevel=logging.CRITICAL + 1)
    root = logging.getLogger()
    root.addHandler(held)
    root.setLevel(logging.DEBUG)
    try:
        config = load_config(args.config)
    finally:
        root.removeHandler(held)
    setup_logging(config, held.buffer)
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logging.warning(f"Unable to set locale; wide characters may not display: {e}")
    controller = build_controller(args.save_file, config)
    try:
        curses.wrapper(run, controller, config)
    except Exception as e:
        logging.critical(f"Unhandled exception: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
