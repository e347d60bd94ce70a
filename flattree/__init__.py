"""
flattree - Flattened Tree Implementation

`flattree` is a Python module with two primary classes: Node and Tree.
A tree stores its nodes in one flat list in depth-first pre-order and is built with a cursor (push/up).
A node is referred to by its position (a NodeId handle) and knows its parent and the size of its subtree.
"""

from .tree import Tree
from .node import Node, NodeId
from .exceptions import CursorAtRoot, IndexOutOfBounds
