"""
Task tree nodes.

A TaskNode owns its children; the link back to its parent is a weak
reference, so a subtree never keeps its ancestors alive. Whoever holds the
tree (normally the NavigationController) must keep a reference to the root.
"""
import weakref
from enum import IntEnum


class Priority(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    def increased(self):
        return Priority(min(self + 1, Priority.HIGH))

    def decreased(self):
        return Priority(max(self - 1, Priority.NONE))


class TaskNode:
    def __init__(self, text: str = "", parent: "TaskNode" = None):
        self.text = text
        self.complete = False
        self.priority = Priority.NONE
        self.children = []
        self._parent = None
        self.parent = parent

    @property
    def parent(self):
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node):
        self._parent = weakref.ref(node) if node is not None else None

    def __repr__(self):
        mark = "X" if self.complete else " "
        return f"<TaskNode [{mark}] {self.priority.name} {self.text!r} ({len(self.children)} children)>"

    def __eq__(self, other):
        """Compare text, flags and children (in order); parents are ignored."""
        if not isinstance(other, TaskNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if (a.text, a.complete, a.priority) != (b.text, b.complete, b.priority):
                return False
            if len(a.children) != len(b.children):
                return False
            pending.extend(zip(a.children, b.children))
        return True

    __hash__ = None

    def path(self):
        """Texts from the top of the tree down to this node.

        The root is left out when its text is empty, which is always the
        case for trees built by the codec.
        """
        trail = []
        node = self
        while node is not None:
            if node.parent is not None or node.text:
                trail.append(node.text)
            node = node.parent
        trail.reverse()
        return trail

    def root(self):
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def add_child(self, child: "TaskNode") -> "TaskNode":
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, index: int) -> "TaskNode":
        child = self.children.pop(index)
        child.parent = None
        return child

    def swap_children(self, i: int, j: int):
        self.children[i], self.children[j] = self.children[j], self.children[i]

    def sort_children_by_priority(self):
        # list.sort stays stable with reverse=True, so equal priorities keep
        # the order the user gave them.
        self.children.sort(key=lambda child: child.priority, reverse=True)
