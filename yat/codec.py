"""
Plain-text save format for task trees.

One task per line:

    [X] (A) Task text

The first three characters hold the completion mark, the next four (after a
space) the priority, and the text starts at offset 8. Sub-tasks are indented
four spaces per level below their parent. The root of the tree is never
written; only its descendants are.
"""
import logging
from pathlib import Path

from .errors import IoFailure, MalformedSave
from .todo import Priority, TaskNode

INDENT = "    "
MARKER_WIDTH = 8

PRIORITY_MARKERS = {
    Priority.HIGH: "(A)",
    Priority.MEDIUM: "(B)",
    Priority.LOW: "(C)",
    Priority.NONE: "( )",
}
PRIORITY_LETTERS = {"A": Priority.HIGH, "B": Priority.MEDIUM, "C": Priority.LOW}


def format_line(node: TaskNode, depth: int = 0) -> str:
    complete = "[X]" if node.complete else "[ ]"
    return f"{INDENT * depth}{complete} {PRIORITY_MARKERS[node.priority]} {node.text}\n"


def parse_line(line: str) -> TaskNode:
    """Build a node from one saved line (indentation is ignored).

    Marker characters that are missing or garbled simply leave the node
    incomplete and without priority.
    """
    line = line.lstrip()
    node = TaskNode(line[MARKER_WIDTH:])
    node.complete = line[1:2] == "X"
    node.priority = PRIORITY_LETTERS.get(line[5:6], Priority.NONE)
    return node


def indent_depth(line: str) -> int:
    # Stray spaces short of a full level are absorbed into the level above.
    return (len(line) - len(line.lstrip(" "))) // len(INDENT)


def serialize(root: TaskNode) -> str:
    lines = []
    pending = [(child, 0) for child in reversed(root.children)]
    while pending:
        node, depth = pending.pop()
        lines.append(format_line(node, depth))
        pending.extend((child, depth + 1) for child in reversed(node.children))
    return "".join(lines)


def deserialize(text: str) -> TaskNode:
    """Rebuild a tree from saved text.

    Raises MalformedSave when a line is indented more than one level past
    the previous one, or when an indented line has no line above it to
    belong to. Blank lines are skipped.
    """
    root = TaskNode()
    current = root
    depth = 0
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        new_depth = indent_depth(line)
        if new_depth == depth + 1:
            if not current.children:
                raise MalformedSave(number, "sub-task has no parent task")
            current = current.children[-1]
        elif new_depth > depth + 1:
            raise MalformedSave(number, "indentation jumped more than one level")
        else:
            for _ in range(depth - new_depth):
                if current.parent is None:
                    break
                current = current.parent
        current.add_child(parse_line(line))
        depth = new_depth
    return root


def read_save(path: Path) -> str:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailure(path, e) from e


def write_save(path: Path, text: str):
    try:
        with Path(path).open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise IoFailure(path, e) from e


def load_tree(path: Path) -> TaskNode:
    """Load a tree from disk, falling back to an empty root on any failure."""
    try:
        root = deserialize(read_save(path))
    except IoFailure as e:
        logging.error(f"Unable to read save file: {e}")
        return TaskNode()
    except MalformedSave as e:
        logging.warning(f"Unable to parse save file {path}: {e}")
        return TaskNode()
    logging.info(f"Loaded {len(root.children)} top-level tasks from {path}")
    return root


def save_tree(root: TaskNode, path: Path) -> bool:
    try:
        write_save(path, serialize(root))
    except IoFailure as e:
        logging.error(f"Unable to write save file: {e}")
        return False
    logging.info(f"Todo list saved to {path}")
    return True
