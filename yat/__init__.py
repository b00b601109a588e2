"""
yat: a terminal todo list with nested sub-tasks.

Tasks can hold sub-tasks to any depth. Each task has a completion mark and
an optional priority; the list is browsed one level at a time by focusing
on a task and going back out. Lists are stored as indented plain text.

Modules:

- todo: the task tree
- codec: the save-file format
- navigation: browsing state and list commands
- editor: Unicode-aware single-line text entry
- config / tui / app: settings, the curses front end and the entry point
"""

__version__ = "0.1.0"
__license__ = "MIT"


def main(argv=None):
    from .app import main as _main
    return _main(argv)


__all__ = ['main']
