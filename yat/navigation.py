"""
Browsing state over a task tree and the commands that edit it.

The controller shows one node at a time: its children are the visible list
and `selection` indexes into it. Focusing on a child pushes the current view
onto a stack of frames; going back pops it. Every command that takes an
index treats a missing or out-of-range one as a no-op.
"""
import logging
from collections import namedtuple
from pathlib import Path

from . import codec
from .todo import TaskNode

Frame = namedtuple("Frame", ["node", "selection", "is_root"])


class NavigationController:
    def __init__(self, root: TaskNode = None, save_path: Path = None):
        # The tree only holds weak links upwards, so the root is kept here.
        self.root = root if root is not None else TaskNode()
        self.current = self.root
        self.selection = None
        self.is_root = True
        self.save_path = save_path
        self.frames = []
        self.finished = False

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def tasks(self):
        return self.current.children

    def selected_task(self):
        index = self._resolve(None)
        if index is None:
            return None
        return self.tasks[index]

    def validate_selection(self):
        """Drop a selection that no longer points into the visible list."""
        if self.selection is not None and not 0 <= self.selection < len(self.tasks):
            logging.warning(f"Selection {self.selection} out of range for {len(self.tasks)} tasks; clearing it")
            self.selection = None
        return self.selection

    def _resolve(self, index):
        if index is None:
            index = self.selection
        if index is None or not 0 <= index < len(self.tasks):
            return None
        return index

    # -----------------------------------------------------------------
    # SELECTION
    # -----------------------------------------------------------------
    def move_selection(self, up: bool):
        count = len(self.tasks)
        if self.validate_selection() is None:
            self.selection = 0 if count else None
        else:
            step = -1 if up else 1
            self.selection = (self.selection + step) % count
        return self.selection

    # -----------------------------------------------------------------
    # LIST EDITING
    # -----------------------------------------------------------------
    def add(self, text: str) -> TaskNode:
        node = self.current.add_child(TaskNode(text))
        self.selection = len(self.tasks) - 1
        return node

    def add_from_line(self, line: str) -> TaskNode:
        node = self.current.add_child(codec.parse_line(line))
        self.selection = len(self.tasks) - 1
        return node

    def edit(self, index=None, text: str = ""):
        if self.selection is None:
            return False
        index = self._resolve(index)
        if index is None:
            return False
        self.tasks[index].text = text
        return True

    def toggle_complete(self, index=None):
        index = self._resolve(index)
        if index is None:
            return False
        task = self.tasks[index]
        task.complete = not task.complete
        return True

    def delete(self, index=None, confirm=None):
        """Remove a task once `confirm` (a no-argument callable) agrees."""
        index = self._resolve(index)
        if index is None:
            return False
        if confirm is not None and not confirm():
            return False
        removed = self.current.remove_child(index)
        self.selection = None
        logging.info(f"Deleted task {removed.text!r}")
        return True

    def move(self, index=None, up: bool = True):
        index = self._resolve(index)
        if index is None:
            return False
        step = -1 if up else 1
        target = (index + step) % len(self.tasks)
        self.current.swap_children(index, target)
        self.selection = target
        return True

    def change_priority(self, index=None, increase: bool = True):
        index = self._resolve(index)
        if index is None:
            return False
        task = self.tasks[index]
        task.priority = task.priority.increased() if increase else task.priority.decreased()
        return True

    def sort(self):
        self.current.sort_children_by_priority()

    # -----------------------------------------------------------------
    # FOCUS
    # -----------------------------------------------------------------
    def focus(self, index=None):
        index = self._resolve(index)
        if index is None:
            return False
        self.frames.append(Frame(self.current, self.selection, self.is_root))
        self.current = self.tasks[index]
        self.is_root = False
        self.selection = 0 if self.current.children else None
        return True

    def back(self):
        if not self.frames:
            return False
        frame = self.frames.pop()
        self.current = frame.node
        self.selection = frame.selection
        self.is_root = frame.is_root
        return True

    def quit(self):
        while self.back():
            pass
        self.finished = True

    # -----------------------------------------------------------------
    # PERSISTENCE
    # -----------------------------------------------------------------
    def save(self) -> bool:
        if self.save_path is None:
            logging.warning("No save location available; list not saved")
            return False
        return codec.save_tree(self.current.root(), self.save_path)
