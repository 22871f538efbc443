"""Unit tests for the Red-Black tree core."""

import math
import random

import pytest

from ordered_map import Color
from ordered_map.components.red_black import RedBlackTree
from ordered_map.components.validation import check_red_black

RED = Color.RED
BLACK = Color.BLACK


def make_tree(keys):
    tree = RedBlackTree()
    for key in keys:
        tree.insert(key, str(key))
        tree.validate()
    return tree


def inorder(tree):
    return [node.key for node in tree.store.iter_nodes()]


@pytest.fixture
def seven():
    """Perfect 7-node tree: 10 over 5/15, red leaves 3, 7, 12, 20."""
    return make_tree([10, 5, 15, 3, 7, 12, 20])


def test_first_insert_is_black_root():
    """Test the empty-tree insert colours the root black."""
    tree = make_tree([1])
    assert tree.store.root.color is BLACK
    assert tree.store.size == 1


def test_ascending_insert_straight_line_case():
    """Test [10, 20, 30] rotates at 10 and leaves 20 black with red children."""
    tree = make_tree([10, 20, 30])
    root = tree.store.root

    assert inorder(tree) == [10, 20, 30]
    assert root.key == 20 and root.color is BLACK
    assert root.left.key == 10 and root.left.color is RED
    assert root.right.key == 30 and root.right.color is RED


def test_descending_insert_straight_line_case():
    """Test the mirrored straight-line case."""
    tree = make_tree([30, 20, 10])
    root = tree.store.root
    assert root.key == 20 and root.color is BLACK
    assert root.left.color is RED and root.right.color is RED


def test_zig_zag_insert_rotates_twice():
    """Test an inner child is straightened before the grandparent rotation."""
    tree = make_tree([30, 10, 20])
    root = tree.store.root
    assert root.key == 20 and root.color is BLACK
    assert (root.left.key, root.right.key) == (10, 30)
    assert root.left.color is RED and root.right.color is RED

    mirror = make_tree([10, 30, 20])
    assert mirror.store.root.key == 20


def test_red_uncle_recolours():
    """Test a red uncle pushes blackness down without rotating."""
    tree = make_tree([20, 10, 30, 5])
    root = tree.store.root

    assert root.key == 20 and root.color is BLACK
    assert root.left.color is BLACK
    assert root.right.color is BLACK
    assert root.left.left.key == 5 and root.left.left.color is RED


def test_duplicate_insert_replaces_value():
    """Test re-inserting a key updates in place and reports no new node."""
    tree = make_tree([1, 2])
    node = tree.store.find_node(2)

    assert tree.insert(2, "two") is False
    assert tree.store.find_node(2) is node
    assert tree.find(2) == "two"
    assert tree.store.size == 2


def test_find():
    tree = make_tree([4, 2, 6])
    assert tree.find(6) == "6"
    assert tree.find(5) is None


def test_remove_missing_returns_none(seven):
    """Test removing an absent key changes nothing."""
    assert seven.remove(99) is None
    assert seven.store.size == 7


def test_remove_returns_pair(seven):
    assert seven.remove(7) == (7, "7")
    assert seven.find(7) is None
    seven.validate()


def test_remove_root_of_seven_node_tree(seven):
    """Test deleting the root keeps black-height and order."""
    black_height = check_red_black(seven.store)

    assert seven.remove(10) == (10, "10")

    assert check_red_black(seven.store) == black_height
    assert inorder(seven) == [3, 5, 7, 12, 15, 20]
    assert seven.store.root.key == 12
    assert seven.store.size == 6


def test_remove_black_leaf_with_red_sibling_child():
    """Test deleting a black leaf whose sibling has a red child."""
    tree = make_tree([10, 5, 15, 3, 7, 12, 20])
    tree.remove(3)
    tree.remove(7)
    # 5 is now a black leaf, its sibling 15 carries red children
    assert tree.store.find_node(5).color is BLACK

    tree.remove(5)

    tree.validate()
    assert inorder(tree) == [10, 12, 15, 20]


def test_remove_black_leaf_with_red_sibling():
    """Test the red-sibling case rotates before resolving the deficiency."""
    tree = make_tree(range(1, 11))
    # Find a black leaf whose sibling is red
    target = None
    for node in tree.store.iter_nodes():
        if node.left is None and node.right is None and node.color is BLACK:
            parent = node.parent
            sibling = parent.right if parent.left is node else parent.left
            if sibling is not None and sibling.color is RED:
                target = node.key
                break
    assert target is not None

    tree.remove(target)

    tree.validate()
    assert target not in inorder(tree)


def test_remove_everything_in_random_order():
    """Test every deletion ordering keeps the invariants."""
    rng = random.Random(7)
    keys = list(range(200))
    tree = make_tree(rng.sample(keys, len(keys)))

    rng.shuffle(keys)
    for i, key in enumerate(keys):
        assert tree.remove(key) == (key, str(key))
        tree.validate()
        assert tree.store.size == len(keys) - i - 1

    assert tree.store.root is None


def test_ascending_height_bound():
    """Test ascending inserts stay within 2 * log2(n + 1)."""
    tree = RedBlackTree()
    for n in range(1, 1001):
        tree.insert(n, n)
    assert tree.store.height() <= 2 * math.log2(1001)
    tree.validate()


def test_height_counts_nodes_on_longest_path(seven):
    assert RedBlackTree().height() == 0
    assert seven.height() == seven.store.height() == 3
