from __future__ import annotations

"""
walker – Generic depth-first traversal over template trees.

One traversal serves every pass that needs to visit nodes: the parser's
section folding, tree printing and rendering. The per-node callback decides
what happens next:

  • CONTINUE – descend into the node's children, then move on
  • SKIP     – move on without descending (sections render themselves)
  • STOP     – abort the whole walk
"""

import enum
from typing import Callable

from ghmustache.core.models import Node


class WalkControl(enum.Enum):
    CONTINUE = 'continue'
    STOP = 'stop'
    SKIP = 'skip'


WalkCallback = Callable[[Node, int], WalkControl]


def walk(root: Node, callback: WalkCallback) -> WalkControl:
    """Visit every descendant of *root* (not *root* itself) in document order."""
    return walk_children(root, callback)


def walk_children(node: Node, callback: WalkCallback, depth: int = 0) -> WalkControl:
    for child in node.children:
        if walk_node(child, callback, depth) is WalkControl.STOP:
            return WalkControl.STOP
    return WalkControl.CONTINUE


def walk_node(node: Node, callback: WalkCallback, depth: int = 0) -> WalkControl:
    control = callback(node, depth)
    if control is WalkControl.STOP:
        return WalkControl.STOP
    if control is WalkControl.SKIP:
        return WalkControl.CONTINUE
    return walk_children(node, callback, depth + 1)
