"""
Curses front end: the window wrapper, prompts and the main input loop.

YatTUI only talks to the terminal through a Window, which keeps the loop,
the dialogue and the confirmation prompt usable with any object offering
the same few methods.
"""
import curses
import logging

from .config import border_glyphs, colour_scheme, keybindings
from .editor import LineEditor, char_width, display_width
from .navigation import NavigationController
from .todo import Priority

MIN_HEIGHT = 10
MIN_WIDTH = 30

PRIORITY_COLOURS = {
    Priority.HIGH: "high",
    Priority.MEDIUM: "medium",
    Priority.LOW: "low",
}

KEY_ALIASES = {
    "\r": "\n",
    curses.KEY_ENTER: "\n",
    "\x7f": curses.KEY_BACKSPACE,
    "\b": curses.KEY_BACKSPACE,
}


def normalize_key(key):
    return KEY_ALIASES.get(key, key)


def trim_display(text: str, width: int) -> str:
    """Cut text so its display width does not exceed width."""
    acc = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def skip_columns(text: str, columns: int):
    """Drop leading characters until at least `columns` columns are gone.

    Returns the rest of the text and the number of columns actually dropped,
    which is one more than asked for when a wide character straddles the cut.
    """
    skipped = 0
    for i, ch in enumerate(text):
        if skipped >= columns:
            return text[i:], skipped
        skipped += char_width(ch)
    return "", skipped


# ---------------------------------------------------------------------
# TERMINAL WRAPPER
# ---------------------------------------------------------------------
class Window:
    def __init__(self, stdscr, config: dict):
        self.stdscr = stdscr
        self.borders = border_glyphs(config)
        self.attrs = {}
        self._init_colours(colour_scheme(config))

    def _init_colours(self, scheme):
        try:
            curses.start_color()
            curses.use_default_colors()
        except curses.error as e:
            logging.warning(f"Colours unavailable: {e}")
            return
        for pair, (role, (fg, bg)) in enumerate(scheme.items(), start=1):
            try:
                curses.init_pair(pair, fg, bg)
                self.attrs[role] = curses.color_pair(pair)
            except curses.error as e:
                logging.warning(f"Unable to set colour for {role}: {e}")

    def getch(self):
        """Block for the next key; None when input has ended."""
        try:
            key = self.stdscr.get_wch()
        except curses.error as e:
            logging.warning(f"Unable to read key: {e}")
            return None
        except KeyboardInterrupt:
            return None
        return normalize_key(key)

    def get_max_yx(self):
        return self.stdscr.getmaxyx()

    def clear(self):
        self.stdscr.erase()

    def refresh(self):
        self.stdscr.refresh()

    def show_cursor(self, visible: bool = True):
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error:
            pass

    def move(self, y: int, x: int):
        try:
            self.stdscr.move(y, x)
        except curses.error:
            pass

    def mvprintw(self, y: int, x: int, text: str, colour: str = None):
        attr = self.attrs.get(colour, curses.A_NORMAL)
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell raises even though it succeeds.
            pass

    def wrap_print(self, y: int, x: int, width: int, text: str, colour: str = None):
        """Print text, ending in '...' when it is wider than width."""
        if width <= 0:
            return
        if display_width(text) > width:
            text = trim_display(text, max(width - 3, 0)) + "..."[:width]
        self.mvprintw(y, x, text, colour)

    def border(self, top: int, left: int, height: int, width: int):
        if height < 2 or width < 2:
            return
        b = self.borders
        bottom = top + height - 1
        right = left + width - 1
        self.mvprintw(top, left, b["ulcorner"] + b["hline"] * (width - 2) + b["urcorner"])
        for y in range(top + 1, bottom):
            self.mvprintw(y, left, b["vline"])
            self.mvprintw(y, right, b["vline"])
        self.mvprintw(bottom, left, b["llcorner"] + b["hline"] * (width - 2) + b["lrcorner"])

    def fill(self, top: int, left: int, height: int, width: int, ch: str = " "):
        for y in range(top, top + height):
            self.mvprintw(y, left, ch * width)


# ---------------------------------------------------------------------
# PROMPTS
# ---------------------------------------------------------------------
def dialogue(window, prompt: str, text: str = "") -> str:
    """Read a line of text in the bottom panel, starting from `text`."""
    ymax, xmax = window.get_max_yx()
    editor = LineEditor(text)
    plen = display_width(prompt)
    start = 3 + plen
    avail = max(xmax - start - 2, 1)
    window.border(ymax - 3, 0, 3, xmax)
    window.show_cursor(True)
    while True:
        window.fill(ymax - 2, 1, 1, xmax - 2)
        window.mvprintw(ymax - 2, 2, prompt, "prompt")
        scroll = max(0, editor.column - avail + 1)
        rest, skipped = skip_columns(editor.text, scroll)
        window.mvprintw(ymax - 2, start, trim_display(rest, avail))
        window.move(ymax - 2, max(start, start + editor.column - skipped))
        window.refresh()
        key = window.getch()
        if key is None or editor.handle_key(key):
            break
    window.show_cursor(False)
    return editor.commit()


def confirm(window, prompt: str, back_key="b") -> bool:
    """Yes/no prompt: 'y' confirms, 'n', 'q' or the back key cancel."""
    ymax, xmax = window.get_max_yx()
    window.border(ymax - 3, 0, 3, xmax)
    window.fill(ymax - 2, 1, 1, xmax - 2)
    window.mvprintw(ymax - 2, 2, prompt, "warning")
    window.refresh()
    while True:
        key = window.getch()
        if key is None:
            return False
        if key == "y":
            return True
        if key in ("n", "q", back_key):
            return False


# ---------------------------------------------------------------------
# MAIN LOOP
# ---------------------------------------------------------------------
class YatTUI:
    def __init__(self, window, controller: NavigationController, config: dict):
        self.window = window
        self.controller = controller
        self.keys = keybindings(config)
        self.commands = {
            "quit": self.controller.quit,
            "back": self.controller.back,
            "save": self.controller.save,
            "add": self.add_task,
            "edit": self.edit_task,
            "delete": self.delete_task,
            "task_up": lambda: self.controller.move(up=True),
            "task_down": lambda: self.controller.move(up=False),
            "up": lambda: self.controller.move_selection(up=True),
            "down": lambda: self.controller.move_selection(up=False),
            "focus": self.controller.focus,
            "complete": self.controller.toggle_complete,
            "increase": lambda: self.controller.change_priority(increase=True),
            "decrease": lambda: self.controller.change_priority(increase=False),
            "sort": self.controller.sort,
        }
        self.dispatch = {}
        for command, key in self.keys.items():
            if key in self.dispatch:
                logging.warning(f"Key {key!r} bound to both {self.dispatch[key]} and {command}")
                continue
            self.dispatch[key] = command

    def run(self):
        self.window.show_cursor(False)
        while not self.controller.finished:
            height, width = self.window.get_max_yx()
            if height < MIN_HEIGHT or width < MIN_WIDTH:
                self.display_minimum_size_warning(height, width)
            else:
                self.draw()
            key = self.window.getch()
            if key is None:
                logging.info("Input closed; leaving")
                self.controller.quit()
                break
            self.handle_key(key)

    def handle_key(self, key):
        command = self.dispatch.get(key)
        if command is None:
            return None
        logging.debug(f"Command: {command}")
        self.commands[command]()
        return command

    # -----------------------------------------------------------------
    # COMMANDS NEEDING INPUT
    # -----------------------------------------------------------------
    def add_task(self):
        text = dialogue(self.window, "New Task:")
        if text.strip():
            self.controller.add(text)

    def edit_task(self):
        task = self.controller.selected_task()
        if task is None:
            return
        text = dialogue(self.window, "Edit Task:", task.text)
        if text.strip():
            self.controller.edit(self.controller.selection, text)

    def delete_task(self):
        if self.controller.selected_task() is None:
            return
        self.controller.delete(confirm=lambda: confirm(
            self.window, "Are you sure you want to delete this task? y/n", self.keys["back"]))

    # -----------------------------------------------------------------
    # DRAWING
    # -----------------------------------------------------------------
    def display_minimum_size_warning(self, height, width):
        self.window.clear()
        warning = "Terminal too small. Resize or press quit."
        self.window.wrap_print(height // 2, 0, width, warning, "warning")
        self.window.refresh()

    def draw(self):
        win = self.window
        ctl = self.controller
        ymax, xmax = win.get_max_yx()
        half = xmax // 2
        win.clear()

        win.border(0, 0, 3, xmax)
        win.border(3, 0, ymax - 6, half)
        win.border(3, half, ymax - 6, xmax - half)
        win.border(ymax - 3, 0, 3, xmax)
        win.mvprintw(0, 2, "Parent", "title")
        win.mvprintw(3, 2, "Tasks", "title")
        win.mvprintw(3, half + 2, "Sub-tasks", "title")
        win.mvprintw(ymax - 3, 2, "Selection", "title")
        win.wrap_print(1, 1, xmax - 2, ": ".join(ctl.current.path()))

        selection = ctl.validate_selection()
        rows = ymax - 8
        top = 0 if selection is None else max(0, selection - rows + 1)
        self.draw_list(ctl.tasks[top:top + rows], 4, 1, half - 1)
        if selection is not None:
            task = ctl.tasks[selection]
            win.mvprintw(4 + selection - top, 1, ">", "selection")
            win.wrap_print(ymax - 2, 2, xmax - 3, task.text, "selection")
            self.draw_list(task.children[:rows], 4, half + 1, xmax - half - 1)
        win.refresh()

    def draw_list(self, tasks, y, x, width):
        win = self.window
        for row, task in enumerate(tasks):
            if task.complete:
                win.mvprintw(y + row, x + 2, "[")
                win.mvprintw(y + row, x + 3, "X", "complete")
                win.mvprintw(y + row, x + 4, "]")
            else:
                win.mvprintw(y + row, x + 2, "[ ]")
            win.wrap_print(y + row, x + 6, width - 7, task.text, PRIORITY_COLOURS.get(task.priority))


def run(stdscr, controller: NavigationController, config: dict):
    window = Window(stdscr, config)
    YatTUI(window, controller, config).run()
