"""
Tests for browsing state and list commands.
"""
import pytest

from yat import codec
from yat.navigation import NavigationController
from yat.todo import Priority, TaskNode


@pytest.fixture
def ctl():
    controller = NavigationController()
    for text in ("a", "b", "c"):
        controller.add(text)
    return controller


def texts(controller):
    return [t.text for t in controller.tasks]


def test_starts_at_root():
    controller = NavigationController()
    assert controller.is_root is True
    assert controller.selection is None
    assert controller.current is controller.root


def test_add_appends_and_selects(ctl):
    assert texts(ctl) == ["a", "b", "c"]
    assert ctl.selection == 2
    assert all(t.parent is ctl.root for t in ctl.tasks)


def test_add_from_line_uses_save_format():
    controller = NavigationController()
    node = controller.add_from_line("[X] (B) loaded")
    assert node.text == "loaded"
    assert node.complete is True
    assert node.priority is Priority.MEDIUM
    assert controller.selection == 0


def test_move_selection_from_nothing():
    controller = NavigationController()
    assert controller.move_selection(up=False) is None
    controller.add("a")
    controller.selection = None
    assert controller.move_selection(up=True) == 0


def test_move_selection_wraps(ctl):
    ctl.selection = 0
    assert ctl.move_selection(up=True) == 2
    assert ctl.move_selection(up=False) == 0
    assert ctl.move_selection(up=False) == 1


def test_edit(ctl):
    assert ctl.edit(1, "B") is True
    assert texts(ctl) == ["a", "B", "c"]


def test_edit_out_of_range_or_without_selection(ctl):
    assert ctl.edit(7, "x") is False
    ctl.selection = None
    assert ctl.edit(0, "x") is False
    assert texts(ctl) == ["a", "b", "c"]


def test_toggle_complete(ctl):
    ctl.toggle_complete(0)
    assert ctl.tasks[0].complete is True
    ctl.toggle_complete(0)
    assert ctl.tasks[0].complete is False
    assert ctl.toggle_complete(5) is False


def test_delete_needs_confirmation(ctl):
    assert ctl.delete(0, confirm=lambda: False) is False
    assert texts(ctl) == ["a", "b", "c"]
    removed = ctl.tasks[0]
    assert ctl.delete(0, confirm=lambda: True) is True
    assert texts(ctl) == ["b", "c"]
    assert ctl.selection is None
    assert removed.parent is None


def test_delete_out_of_range_never_asks(ctl):
    asked = []
    assert ctl.delete(9, confirm=lambda: asked.append(True) or True) is False
    assert asked == []


def test_move_up_and_down(ctl):
    ctl.move(1, up=True)
    assert texts(ctl) == ["b", "a", "c"]
    assert ctl.selection == 0
    ctl.move(0, up=False)
    assert texts(ctl) == ["a", "b", "c"]
    assert ctl.selection == 1


def test_move_wraps_by_swapping(ctl):
    ctl.move(0, up=True)
    assert texts(ctl) == ["c", "b", "a"]
    assert ctl.selection == 2
    ctl.move(2, up=False)
    assert texts(ctl) == ["a", "b", "c"]
    assert ctl.selection == 0


def test_change_priority_ladder(ctl):
    for _ in range(4):
        ctl.change_priority(0, increase=True)
    assert ctl.tasks[0].priority is Priority.HIGH
    for _ in range(3):
        ctl.change_priority(0, increase=False)
    assert ctl.tasks[0].priority is Priority.NONE
    ctl.change_priority(0, increase=False)
    assert ctl.tasks[0].priority is Priority.NONE


def test_commands_use_selection_by_default(ctl):
    ctl.selection = 1
    ctl.toggle_complete()
    ctl.change_priority()
    assert ctl.tasks[1].complete is True
    assert ctl.tasks[1].priority is Priority.LOW


def test_focus_and_back(ctl):
    ctl.selection = 1
    assert ctl.focus() is True
    assert ctl.current.text == "b"
    assert ctl.is_root is False
    assert ctl.selection is None
    ctl.add("b.1")
    ctl.back()
    assert ctl.current is ctl.root
    assert ctl.is_root is True
    assert ctl.selection == 1
    ctl.focus(1)
    assert ctl.selection == 0


def test_back_at_root_is_noop(ctl):
    assert ctl.back() is False
    assert ctl.current is ctl.root
    assert ctl.selection == 2


def test_focus_without_selection_is_noop():
    controller = NavigationController()
    assert controller.focus() is False
    assert controller.depth == 0


def test_deep_focus_uses_frames_not_recursion():
    controller = NavigationController()
    for level in range(2000):
        controller.add(f"level {level}")
        controller.focus(0)
    assert controller.depth == 2000
    controller.quit()
    assert controller.finished is True
    assert controller.current is controller.root
    assert controller.depth == 0


def test_quit_unwinds_all_frames(ctl):
    ctl.focus(0)
    ctl.add("x")
    ctl.focus(0)
    ctl.quit()
    assert ctl.is_root is True
    assert ctl.finished is True


def test_validate_selection_resets_stale_index(ctl):
    ctl.selection = 2
    ctl.current.remove_child(2)
    assert ctl.validate_selection() is None
    assert ctl.selection is None


def test_sort(ctl):
    ctl.change_priority(2, increase=True)
    ctl.sort()
    assert texts(ctl) == ["c", "a", "b"]


def test_save_walks_to_root(tmp_path):
    path = tmp_path / "save.txt"
    controller = NavigationController(save_path=path)
    controller.add("top")
    controller.focus(0)
    controller.add("inner")
    assert controller.save() is True
    assert path.read_text(encoding="utf-8") == "[ ] ( ) top\n    [ ] ( ) inner\n"


def test_save_without_location():
    controller = NavigationController()
    controller.add("a")
    assert controller.save() is False


def test_end_to_end_scenario(tmp_path):
    path = tmp_path / "save.txt"
    controller = NavigationController(TaskNode(), path)
    controller.add("Buy milk")
    controller.add("Clean house")
    controller.focus(0)
    controller.add("2% milk")
    controller.back()
    controller.change_priority(0, increase=True)
    controller.change_priority(0, increase=True)
    controller.change_priority(0, increase=True)
    controller.sort()
    expected = (
        "[ ] (A) Buy milk\n"
        "    [ ] ( ) 2% milk\n"
        "[ ] ( ) Clean house\n"
    )
    assert codec.serialize(controller.root) == expected
    controller.save()
    assert path.read_text(encoding="utf-8") == expected
