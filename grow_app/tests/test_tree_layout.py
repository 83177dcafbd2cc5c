import pytest

from grow_app.growth.models import Challenge, Habit, Task
from grow_app.growth.seed import create_store
from grow_app.growth.store import GrowthStore
from grow_app.growth.tree_layout import TreeLayoutEngine


def make_habits():
    return [
        Habit(id="h1", title="Meditate", streak=5, completed=True),
        Habit(id="h2", title="Read", streak=3, completed=False),
    ]


def test_trunk_width_and_height():
    habits = make_habits()
    # 20 + 8 * 3 = 44, plus one completed habit
    assert TreeLayoutEngine.trunk_width(habits) == 52
    assert TreeLayoutEngine.trunk_height(habits, root_goal_count=2) == 150 + 60 + 15


def test_trunk_width_is_capped():
    habits = [Habit(id=str(i), title="x", streak=40, completed=True) for i in range(3)]
    assert TreeLayoutEngine.trunk_width(habits) == 120
    assert TreeLayoutEngine.trunk_width([]) == 20


@pytest.mark.parametrize("progress, level, expected", [
    (0, 0, 50),
    (50, 0, 95),
    (100, 0, 140),
    (100, 1, 115),
])
def test_branch_length(progress, level, expected):
    assert TreeLayoutEngine.branch_length(progress, level) == pytest.approx(expected)


def test_branch_angle():
    assert TreeLayoutEngine.branch_angle(True, 0, 0, 2) == pytest.approx(15)
    assert TreeLayoutEngine.branch_angle(False, 0, 1, 2) == pytest.approx(-25)
    assert TreeLayoutEngine.branch_angle(True, 1, 2, 3) == pytest.approx(25 + 10 / 6 + 5 + 5)


def test_branch_thickness_tapers():
    assert [TreeLayoutEngine.branch_thickness(level) for level in range(4)] == [10, 8, 6, 4]


def test_leaf_positions():
    task = Task(id="t1", title="Step", goal_id="g1", completed=True)
    left = TreeLayoutEngine.leaf(task, 1, True, 10)
    right = TreeLayoutEngine.leaf(task, 0, False, 8)
    assert (left.offset, left.top) == (45, -15)
    assert (right.offset, right.top) == (20, 8)
    assert left.completed is True


def test_root_angles_fan_out():
    angles = [TreeLayoutEngine.root_angle(i, 5) for i in range(5)]
    assert angles == pytest.approx([30, 15, 0, -15, -30])


def test_build_splits_root_goals():
    store = GrowthStore()
    first = store.add_goal("First")
    second = store.add_goal("Second")
    third = store.add_goal("Third")
    store.add_task("Leaf", third.id)
    layout = TreeLayoutEngine().build([], store.get_goals(), [])

    assert [b.goal_id for b in layout.left] == [first.id, second.id]
    assert [b.goal_id for b in layout.right] == [third.id]
    assert [b.top for b in layout.left] == [40, 100]
    assert layout.right[0].side == "right"
    assert layout.right[0].leaves[0].top == 10


def test_build_nests_subgoals_and_roots():
    store = create_store(seed_demo_data=True)
    layout = TreeLayoutEngine().build(store.get_habits(), store.get_goals(), store.get_challenges())

    assert layout.trunk_width == 84
    assert layout.trunk_height == 300
    write_book = layout.left[0]
    assert write_book.title == "Write a Book"
    assert [child.title for child in write_book.children] == ["Read 24 Books This Year"]
    child = write_book.children[0]
    assert child.level == 1
    assert child.top is None
    assert child.thickness == 8
    assert len(layout.roots) == 5
    assert layout.hidden_goal_ids == []


def test_deep_goals_are_hidden():
    store = GrowthStore()
    parent = None
    chain = []
    for i in range(4):
        goal = store.add_goal(f"Level {i}", parent_id=parent)
        chain.append(goal.id)
        parent = goal.id
    layout = TreeLayoutEngine(max_level=1).build([], store.get_goals(), [])

    top = layout.left[0]
    assert top.children[0].goal_id == chain[1]
    assert top.children[0].children == []
    assert layout.hidden_goal_ids == chain[2:]


def test_default_depth_cutoff():
    store = GrowthStore()
    parent = None
    chain = []
    for i in range(5):
        goal = store.add_goal(f"Level {i}", parent_id=parent)
        chain.append(goal.id)
        parent = goal.id
    layout = TreeLayoutEngine().build([], store.get_goals(), [])

    branch = layout.left[0]
    drawn = []
    while True:
        drawn.append((branch.goal_id, branch.level))
        if not branch.children:
            break
        branch = branch.children[0]
    assert drawn == [(goal_id, level) for level, goal_id in enumerate(chain[:4])]
    assert layout.hidden_goal_ids == [chain[4]]


def test_build_is_deterministic():
    store = create_store(seed_demo_data=True)
    engine = TreeLayoutEngine()
    first = engine.build(store.get_habits(), store.get_goals(), store.get_challenges())
    second = engine.build(store.get_habits(), store.get_goals(), store.get_challenges())
    assert first == second


def test_roots_follow_challenges():
    challenges = [Challenge(id="c1", title="Breathe", completed=True), Challenge(id="c2", title="Walk")]
    layout = TreeLayoutEngine().build([], [], challenges)
    assert [r.challenge_id for r in layout.roots] == ["c1", "c2"]
    assert [r.completed for r in layout.roots] == [True, False]
    assert layout.left == [] and layout.right == []
