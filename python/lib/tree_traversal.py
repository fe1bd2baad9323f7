#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tree_traversal.py
-----------------

Read‑only walks over the nodes of a ``RedBlackTree``.

Every walk is a lazy generator built fresh on each call, so it always
reflects the tree as it is *when iteration starts*.  Inserting into the tree
while a walk is still being consumed is not supported.

Two flavours are provided:

* ``traverse(root, nil, order)`` yields ``Visit(key, color)`` pairs in
  pre‑order (the order a renderer draws nodes), in‑order or post‑order.
* ``walk(root, nil)`` yields ``NodeView(key, color, depth, side)`` in
  pre‑order, for consumers that need the shape of the tree and not only the
  sequence of keys.

Both functions only need the root node and the shared sentinel leaf; they
never touch ``parent`` links and never mutate anything.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> from tree_traversal import Order
>>> rbt = RedBlackTree([10, 5, 15])
>>> [v.key for v in rbt.traverse(Order.PRE_ORDER)]
[10, 5, 15]
>>> [v.key for v in rbt.traverse(Order.IN_ORDER)]
[5, 10, 15]
"""

from __future__ import annotations

import enum
from typing import Any, Iterator, List, NamedTuple, Tuple


class Order(enum.Enum):
    """The order in which ``traverse`` visits the nodes."""

    PRE_ORDER = "pre"
    IN_ORDER = "in"
    POST_ORDER = "post"


class Side(enum.Enum):
    """Which child of its parent a node is."""

    ROOT = "root"
    LEFT = "left"
    RIGHT = "right"


class Visit(NamedTuple):
    """One visited node: its key and its colour (``RED`` / ``BLACK``)."""

    key: Any
    color: bool


class NodeView(NamedTuple):
    """A visited node together with its position in the tree."""

    key: Any
    color: bool
    depth: int
    side: Side


# ----------------------------------------------------------------------
#  Node generators (internal) – each one walks with an explicit stack
# ----------------------------------------------------------------------
def _pre_order(root: Any, nil: Any) -> Iterator[Any]:
    stack: List[Any] = [] if root is nil else [root]
    while stack:
        node = stack.pop()
        yield node
        # Right is pushed first so that the left subtree comes out first.
        if node.right is not nil:
            stack.append(node.right)
        if node.left is not nil:
            stack.append(node.left)


def _in_order(root: Any, nil: Any) -> Iterator[Any]:
    stack: List[Any] = []
    cur = root
    while stack or cur is not nil:
        while cur is not nil:
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        yield cur
        cur = cur.right


def _post_order(root: Any, nil: Any) -> Iterator[Any]:
    stack: List[Any] = []
    last = nil
    cur = root
    while stack or cur is not nil:
        if cur is not nil:
            stack.append(cur)
            cur = cur.left
            continue
        top = stack[-1]
        if top.right is not nil and top.right is not last:
            cur = top.right
        else:
            yield top
            last = stack.pop()


_WALKERS = {
    Order.PRE_ORDER: _pre_order,
    Order.IN_ORDER: _in_order,
    Order.POST_ORDER: _post_order,
}


# ----------------------------------------------------------------------
#  Public API
# ----------------------------------------------------------------------
def traverse(root: Any, nil: Any, order: Order = Order.PRE_ORDER) -> Iterator[Visit]:
    """
    Return a generator of ``Visit`` pairs for the subtree rooted at *root*.

    Parameters
    ----------
    root : node
        Subtree root; ``nil`` for an empty tree.
    nil : node
        The tree's sentinel leaf.
    order : Order
        ``PRE_ORDER`` (default), ``IN_ORDER`` or ``POST_ORDER``.

    Raises ``ValueError`` straight away (not on first ``next``) if *order* is
    not an ``Order`` member.
    """
    try:
        walker = _WALKERS[order]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown traversal order: {order!r}") from None
    return (Visit(node.key, node.color) for node in walker(root, nil))


def walk(root: Any, nil: Any) -> Iterator[NodeView]:
    """Yield a ``NodeView`` for every node in pre‑order; the root has depth 0."""
    if root is nil:
        return
    stack: List[Tuple[Any, int, Side]] = [(root, 0, Side.ROOT)]
    while stack:
        node, depth, side = stack.pop()
        yield NodeView(node.key, node.color, depth, side)
        if node.right is not nil:
            stack.append((node.right, depth + 1, Side.RIGHT))
        if node.left is not nil:
            stack.append((node.left, depth + 1, Side.LEFT))
