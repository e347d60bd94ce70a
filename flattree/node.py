#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Node structure in flattree.

A :class:`Node` object is the record of one node in the flat node sequence of a Tree: the user payload,
the handle of the parent and the number of descendants. Nodes are identified by their position in the
sequence, wrapped in a :class:`NodeId` handle.
"""

from typing import Any, Union


class NodeId(int):
    """
    Handle of a node: its position in the node sequence of a Tree.

    It is an integer in every respect (list index, comparison, hashing). Subclass it to get a handle type
    that a Tree with a different ``key_type`` refuses.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({int(self)})'


class Node:
    """
    Nodes are elementary objects that are stored in the node sequence of a Tree.
    Use `value` attribute to store node-specific data.
    """

    __slots__ = ('value', '_nid', '_parent', '_descendant_count')

    def __init__(self, value: Any = None, nid: Union[NodeId, None] = None, parent: Union[NodeId, None] = None,
                 descendant_count: int = 0):
        #: User payload, can be modified with ``.`` and ``=`` operator.
        self.value: Any = value
        self._nid = nid
        #: None for the root node.
        self._parent = parent
        #: Size of the subtree without the node itself (maintained by Tree.push()).
        self._descendant_count = descendant_count

    @property
    def nid(self) -> Union[NodeId, None]:
        """
        The handle (position) of the node in its tree.
        """
        return self._nid

    @property
    def parent(self) -> Union[NodeId, None]:
        """
        The handle of the parent node or None for the root.
        """
        return self._parent

    @property
    def descendant_count(self) -> int:
        """
        The number of nodes in the subtree of this node, not including the node.
        """
        return self._descendant_count

    def is_leaf(self) -> bool:
        """
        Return true if current node has no children.
        """
        return self._descendant_count == 0

    def is_root(self) -> bool:
        """
        Return true if self has no parent, i.e. as root.
        """
        return self._parent is None

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.value == other.value and self._nid == other._nid and self._parent == other._parent
                and self._descendant_count == other._descendant_count)

    __hash__ = None  # Mutable record.

    def __repr__(self) -> str:
        name = self.__class__.__name__
        kwargs = [
            f'nid={self._nid!r}',
            f'value={self.value!r}',
            f'parent={self._parent!r}',
            f'descendant_count={self._descendant_count}',
        ]
        return f'{name}({", ".join(kwargs)})'
