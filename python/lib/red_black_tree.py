#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

A self‑balancing binary search tree based on the **Red‑Black** algorithm.
It stores an ordered *set* of integer keys and keeps its height within
``2 * log2(n + 1)`` after every insertion.

Features
~~~~~~~~
* `tree.insert(key)`     – add a key (``DuplicateKeyError`` if already there)
* `key in tree`          – membership test
* `len(tree)`, `tree.is_empty()`
* iteration (`for key in tree:`) – keys in ascending order
* `tree.traverse(order)` – lazy ``(key, color)`` visits, pre‑order by default
* `tree.walk()`          – pre‑order visits with depth and child side
* `tree.min_key()`, `tree.max_key()`
* `tree.successor(key)`, `tree.predecessor(key)` (raise KeyError if not found)
* `tree.height()`, `tree.black_height()`
* `tree.validate()` – check that the red‑black invariants hold

Keys are never removed; the tree only grows.

The implementation uses a **single shared sentinel node** (`self._nil`) to
represent all leafs.  The sentinel is BLACK and is also the parent of the
root.  ``parent`` links are only used to find the grandparent and uncle while
rebalancing; they are set the moment a node is attached or rotated.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree, color_name
>>> rbt = RedBlackTree()
>>> for k in (10, 5, 1):
...     rbt.insert(k)
>>> [(v.key, color_name(v.color)) for v in rbt.traverse()]
[(5, 'black'), (1, 'red'), (10, 'red')]
>>> rbt.insert(5)
Traceback (most recent call last):
    ...
red_black_tree.DuplicateKeyError: 5
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from tree_traversal import NodeView, Order, Visit, traverse, walk

_logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Node colour constants – using simple booleans is fastest
# ----------------------------------------------------------------------
RED = True
BLACK = False


def color_name(color: bool) -> str:
    """Return ``"red"`` or ``"black"`` for a colour constant."""
    return "red" if color == RED else "black"


# ----------------------------------------------------------------------
#  Errors
# ----------------------------------------------------------------------
class DuplicateKeyError(KeyError):
    """``insert`` was given a key that is already in the tree."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key


class InvariantViolation(AssertionError):
    """The tree structure is corrupt, or a rotation precondition failed."""


class _Node:
    """Internal node object – not meant to be used directly by callers."""

    __slots__ = ("key", "color", "left", "right", "parent")

    def __init__(
        self,
        key: Optional[int] = None,
        color: bool = BLACK,
        left: Optional["_Node"] = None,
        right: Optional["_Node"] = None,
        parent: Optional["_Node"] = None,
    ) -> None:
        self.key = key
        self.color = color
        self.left = left
        self.right = right
        self.parent = parent

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}>"


class RedBlackTree:
    """
    An ordered set of keys implemented with a red‑black binary search tree.

    The only mutating operation is ``insert``.  Reads (``traverse``,
    ``walk``, iteration, look‑ups) never change the tree.  Nothing here is
    thread‑safe: callers sharing a tree across threads must serialise every
    call themselves.
    """

    __slots__ = ("_root", "_nil", "_size", "_allow_duplicates")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(
        self,
        keys: Optional[Iterable[int]] = None,
        *,
        allow_duplicates: bool = False,
    ) -> None:
        """
        Create an empty tree or optionally fill it from an iterable of keys.

        Parameters
        ----------
        keys : iterable of int   optional
            If supplied, each key is inserted in turn using ``insert`` (i.e.
            the whole operation is O(n log n)).  A repeated key raises
            ``DuplicateKeyError`` unless ``allow_duplicates`` is set.

        allow_duplicates : bool, default ``False``
            Legacy routing policy: an equal key is sent to the right subtree
            instead of being rejected.  In‑order iteration is then only
            non‑decreasing.
        """
        # The sentinel leaf node – shared by every leaf in the tree.
        self._nil: _Node = _Node()
        self._nil.color = BLACK
        self._nil.left = self._nil.right = self._nil.parent = self._nil

        self._root: _Node = self._nil
        self._size: int = 0
        self._allow_duplicates = allow_duplicates

        if keys is not None:
            for key in keys:
                self.insert(key)

    def __contains__(self, key: object) -> bool:
        return self._search_node(key) is not self._nil

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not self._nil

    def is_empty(self) -> bool:
        """Return ``True`` when the tree holds no keys."""
        return self._root is self._nil

    def __iter__(self) -> Iterator[int]:
        """Yield keys in ascending order (in‑order traversal)."""
        return (visit.key for visit in self.traverse(Order.IN_ORDER))

    @property
    def allow_duplicates(self) -> bool:
        """Whether equal keys are routed right instead of rejected."""
        return self._allow_duplicates

    # ------------------------------------------------------------------
    #   Traversal
    # ------------------------------------------------------------------
    def traverse(self, order: Order = Order.PRE_ORDER) -> Iterator[Visit]:
        """
        Return a fresh lazy sequence of ``Visit(key, color)`` pairs.

        Pre‑order (node, left subtree, right subtree) is the default since
        that is the order a renderer draws the nodes in.
        """
        return traverse(self._root, self._nil, order)

    def walk(self) -> Iterator[NodeView]:
        """Pre‑order ``NodeView(key, color, depth, side)`` records."""
        return walk(self._root, self._nil)

    # ------------------------------------------------------------------
    #   Helper index look‑up (internal)
    # ------------------------------------------------------------------
    def _search_node(self, key: Any) -> _Node:
        """Return the node that holds *key* or the sentinel `_nil` if not found."""
        cur = self._root
        while cur is not self._nil:
            if key < cur.key:
                cur = cur.left
            elif cur.key < key:
                cur = cur.right
            else:
                return cur
        return self._nil

    # ------------------------------------------------------------------
    #   Minimum / maximum helpers
    # ------------------------------------------------------------------
    def _minimum_node(self, start: Optional[_Node] = None) -> _Node:
        """Return the node with the smallest key in the subtree rooted at *start*."""
        node = start if start is not None else self._root
        if node is self._nil:
            raise ValueError("Tree is empty")
        while node.left is not self._nil:
            node = node.left
        return node

    def _maximum_node(self, start: Optional[_Node] = None) -> _Node:
        """Return the node with the largest key in the subtree rooted at *start*."""
        node = start if start is not None else self._root
        if node is self._nil:
            raise ValueError("Tree is empty")
        while node.right is not self._nil:
            node = node.right
        return node

    def min_key(self) -> int:
        """Return the smallest key stored in the tree."""
        return self._minimum_node().key  # type: ignore[return-value]

    def max_key(self) -> int:
        """Return the largest key stored in the tree."""
        return self._maximum_node().key  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Successor / predecessor
    # ------------------------------------------------------------------
    def _next_node(self, node: _Node) -> _Node:
        """Return the in‑order neighbour after `node`, or `_nil` at the end."""
        if node.right is not self._nil:
            return self._minimum_node(node.right)

        # Walk up until we find a node that is a left child of its parent.
        y = node.parent
        while y is not self._nil and node is y.right:
            node = y
            y = y.parent
        return y

    def _prev_node(self, node: _Node) -> _Node:
        """Return the in‑order neighbour before `node`, or `_nil` at the start."""
        if node.left is not self._nil:
            return self._maximum_node(node.left)

        y = node.parent
        while y is not self._nil and node is y.left:
            node = y
            y = y.parent
        return y

    def successor(self, key: int) -> int:
        """Return the smallest key greater than *key*; raise KeyError if none."""
        node = self._search_node(key)
        if node is self._nil:
            raise KeyError(key)

        # Equal keys (``allow_duplicates``) may sit on either side of `node`.
        node = self._next_node(node)
        while node is not self._nil and not key < node.key:
            node = self._next_node(node)
        if node is self._nil:
            raise KeyError(f"No successor for {key}")
        return node.key  # type: ignore[return-value]

    def predecessor(self, key: int) -> int:
        """Return the greatest key smaller than *key*; raise KeyError if none."""
        node = self._search_node(key)
        if node is self._nil:
            raise KeyError(key)

        node = self._prev_node(node)
        while node is not self._nil and not node.key < key:
            node = self._prev_node(node)
        if node is self._nil:
            raise KeyError(f"No predecessor for {key}")
        return node.key  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Family relations – computed from `parent`, never stored
    # ------------------------------------------------------------------
    def _grandparent(self, node: _Node) -> _Node:
        return node.parent.parent

    def _sibling(self, node: _Node) -> _Node:
        parent = node.parent
        return parent.right if node is parent.left else parent.left

    def _uncle(self, node: _Node) -> _Node:
        return self._sibling(node.parent)

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, key: int) -> None:
        """
        Add *key* to the tree and rebalance.

        Raises ``DuplicateKeyError`` if *key* is already present (unless the
        tree was built with ``allow_duplicates=True``).  The check happens
        during the descent, before anything is modified, so a failed insert
        leaves the tree exactly as it was.
        """
        parent = self._nil
        cur = self._root
        go_left = False

        while cur is not self._nil:
            parent = cur
            if key < cur.key:
                go_left = True
            elif cur.key < key or self._allow_duplicates:
                go_left = False
            else:
                _logger.debug("insert %r: key already present", key)
                raise DuplicateKeyError(key)
            cur = cur.left if go_left else cur.right

        # At this point `cur` is the sentinel, `parent` is where we attach.
        new_node = _Node(
            key=key,
            color=RED,
            left=self._nil,
            right=self._nil,
            parent=parent,
        )

        if parent is self._nil:
            self._root = new_node
        elif go_left:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._fix_insert(new_node)

    # ------------------------------------------------------------------
    #   Insert fix‑up (preserves red‑black properties)
    # ------------------------------------------------------------------
    def _fix_insert(self, z: _Node) -> None:
        """
        Restore red‑black properties after `z` was attached as a RED node.

        Each pass looks at `z`, its parent, uncle and grandparent:

        * root      – `z` is the root: paint it black, done.
        * safe      – parent is black: nothing is violated, done.
        * red uncle – parent and uncle red: push the grandparent's blackness
                      down one level and carry on from the grandparent.
        * triangle  – uncle black and `z` an inner grandchild: rotate at the
                      parent so `z`, parent and grandparent form a line.
        * line      – uncle black and `z` an outer grandchild: swap colours of
                      parent and grandparent, rotate at the grandparent.
        """
        while True:
            parent = z.parent
            if parent is self._nil:
                _logger.debug("fix-up at %r: root, painting black", z.key)
                z.color = BLACK
                return
            if parent.color == BLACK:
                return

            grand = self._grandparent(z)
            if grand is self._nil:
                raise InvariantViolation(
                    f"red node {parent.key!r} is the root of the tree"
                )
            uncle = self._uncle(z)

            if uncle.color == RED:
                _logger.debug(
                    "fix-up at %r: red uncle %r, recolouring", z.key, uncle.key
                )
                parent.color = BLACK
                uncle.color = BLACK
                grand.color = RED
                z = grand
                continue

            if parent is grand.left:
                if z is parent.right:
                    _logger.debug("fix-up at %r: left-right triangle", z.key)
                    self._rotate_left(parent)
                    z, parent = parent, z
                _logger.debug("fix-up at %r: left-left line", z.key)
                parent.color = BLACK
                grand.color = RED
                self._rotate_right(grand)
            else:  # Mirror of the above (parent is a right child)
                if z is parent.left:
                    _logger.debug("fix-up at %r: right-left triangle", z.key)
                    self._rotate_right(parent)
                    z, parent = parent, z
                _logger.debug("fix-up at %r: right-right line", z.key)
                parent.color = BLACK
                grand.color = RED
                self._rotate_left(grand)
            return

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_left(self, x: _Node) -> None:
        """Left‑rotate the subtree rooted at `x`."""
        y = x.right
        if x is self._nil or y is self._nil:
            raise InvariantViolation(
                "rotate_left called on a node with nil right child"
            )
        _logger.debug("rotate left at %r", x.key)
        # Turn y's left subtree into x's right subtree
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        # Link x's parent to y
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        # Put x on y's left
        y.left = x
        x.parent = y

    def _rotate_right(self, y: _Node) -> None:
        """Right‑rotate the subtree rooted at `y`."""
        x = y.left
        if y is self._nil or x is self._nil:
            raise InvariantViolation(
                "rotate_right called on a node with nil left child"
            )
        _logger.debug("rotate right at %r", y.key)
        # Turn x's right subtree into y's left subtree
        y.left = x.right
        if x.right is not self._nil:
            x.right.parent = y
        # Link y's parent to x
        x.parent = y.parent
        if y.parent is self._nil:
            self._root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        # Put y on x's right
        x.right = y
        y.parent = x

    # ------------------------------------------------------------------
    #   Shape metrics
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        return max((view.depth + 1 for view in self.walk()), default=0)

    def black_height(self) -> int:
        """
        Number of black nodes on every root‑to‑leaf path, root included.
        Raises ``InvariantViolation`` if the paths disagree.
        """
        if self._root is self._nil:
            return 0
        # `_check` counts the nil leaf as well.
        return self._check(self._root, None, None) - 1

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``InvariantViolation`` with a descriptive message if something
        is broken.
        """
        if self._nil.color != BLACK:
            raise InvariantViolation("Sentinel leaf is not black")
        if self._root is self._nil:
            return
        if self._root.color != BLACK:
            raise InvariantViolation("Root is not black")
        if self._root.parent is not self._nil:
            raise InvariantViolation("Root has a parent")
        self._check(self._root, None, None)

    def _check(self, node: _Node, low: Optional[_Node], high: Optional[_Node]) -> int:
        """
        Check the subtree rooted at `node` and return its black height,
        counting the nil leaf as 1.

        ``low`` / ``high`` are the nearest ancestors whose keys bound the
        subtree from below / above (``None`` when unbounded).
        """
        if node is self._nil:
            return 1  # leaves count as black height 1 (they are black)

        # BST ordering against every ancestor, not only the parent.  With
        # duplicates allowed rotations may put an equal key on either side.
        if low is not None and not self._ordered(low.key, node.key):
            raise InvariantViolation(
                f"BST property violated: {node.key!r} is not above {low.key!r}"
            )
        if high is not None and not self._ordered(node.key, high.key):
            raise InvariantViolation(
                f"BST property violated: {node.key!r} is not below {high.key!r}"
            )

        # Red nodes have black children
        if node.color == RED:
            if node.left.color == RED:
                raise InvariantViolation(f"Red node {node.key!r} has red left child")
            if node.right.color == RED:
                raise InvariantViolation(f"Red node {node.key!r} has red right child")

        for child in (node.left, node.right):
            if child is not self._nil and child.parent is not node:
                raise InvariantViolation(
                    f"Node {child.key!r} has a stale parent link"
                )

        left_black = self._check(node.left, low, node)
        right_black = self._check(node.right, node, high)

        # All paths have the same black height
        if left_black != right_black:
            raise InvariantViolation(f"Black-height mismatch below {node.key!r}")

        return left_black + (1 if node.color == BLACK else 0)

    def _ordered(self, smaller: Any, larger: Any) -> bool:
        if self._allow_duplicates:
            return not larger < smaller
        return smaller < larger

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"RedBlackTree({list(self)!r})"
