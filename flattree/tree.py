#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Tree structure in `flattree`.

The :class:`Tree` object stores a rooted, ordered tree as one flat list of :class:`Node` records in depth-first
pre-order. The tree is built with a cursor: ``push()`` adds a child to the current node and descends into it,
``up()`` ascends to the parent. Every node counts its descendants, so a subtree is the contiguous slice
``[position, position + descendant_count]`` and the next sibling of a node is ``descendant_count + 1`` positions
further. A new tree can be created from scratch without any parameter or a shallow/deep copy of another tree.
"""

from copy import deepcopy
from operator import index
from collections import deque
from typing import Any, Union, MutableMapping, Tuple

from .exceptions import CursorAtRoot, IndexOutOfBounds
from .node import Node, NodeId


class Tree:
    """
    Tree objects are made of Node(s) stored in a list in the order they were pushed (pre-order).
    """

    #: DEPTH, WIDTH constants :
    DEPTH, WIDTH = range(2)
    node_class = Node  # Subclasses can have own type of node_class.
    key_type = NodeId  # Subclasses can have own type of handles, refused by trees of any other key_type.

    def __init__(self, tree=None, deep: bool = False):
        """
        Initiate a new tree or copy another tree with a shallow or deep copy.
        """
        assert issubclass(self.node_class, Node), 'node_class should be type of Node or sublcass of Node !'
        assert issubclass(self.key_type, NodeId), 'key_type should be type of NodeId or sublcass of NodeId !'

        #: Node records in pre-order, the position of a node is its identity.
        self._nodes = []
        #: Positions from the root to the current node (top of the stack).
        self._cursor = []

        if tree is not None:
            self._copy_tree(tree, dest_tree=self, deep=deep)

        # Render characters
        self._dt: MutableMapping[str, Tuple[str, str, str]] = {
            'ascii': ('|', '|-- ', '+-- '),
            'ascii-ex': ('│', '├── ', '└── '),
            'ascii-exr': ('│', '├── ', '╰── '),
            'ascii-em': ('║', '╠══ ', '╚══ '),
            'ascii-emv': ('║', '╟── ', '╙── '),
            'ascii-emh': ('│', '╞══ ', '╘══ '),
        }

    # HELPER FUNCTIONS -------------------------------------------------------------------------------------------------
    @staticmethod
    def _copy_tree(src_tree, dest_tree, deep):
        # Node records are always copied: pushing to one tree must not update the counts of the other.
        key = dest_tree.key_type
        for node in src_tree._nodes:
            value = deepcopy(node.value) if deep else node.value
            parent = None if node.parent is None else key(node.parent)
            dest_tree._nodes.append(dest_tree.node_class(value, key(node.nid), parent, node.descendant_count))
        dest_tree._cursor = list(src_tree._cursor)

    @staticmethod
    def _get_lookup_nodes_fun(lookup_nodes):
        if lookup_nodes:
            return lambda x: x
        return lambda x: x.nid

    def _get_pos(self, node) -> int:
        """
        Get the position for the given Node instance or handle (used internally).
        Raise IndexOutOfBounds if the position is not in the tree.
        """
        if isinstance(node, self.node_class):
            node = node.nid
        if isinstance(node, NodeId) and type(node) is not self.key_type:
            raise TypeError(f'Handle of type {type(node).__name__} can not be used with {self.key_type.__name__} '
                            f'handles!')
        if isinstance(node, bool):
            raise TypeError(f'Node handle must be an integer not {type(node)}!')
        pos = index(node)  # TypeError for non-integer handles.

        if not 0 <= pos < len(self._nodes):
            raise IndexOutOfBounds(f'Node ({pos}) is not in the tree of {len(self._nodes)} nodes!')

        return pos

    def _check_initial_node(self, node):
        if node is not None:
            return self._get_pos(node)
        elif len(self._nodes) == 0:
            return None  # Empty tree.
        return 0  # Root node.

    # CONSTRUCTION FUNCTIONS -------------------------------------------------------------------------------------------
    def push(self, value: Any = None) -> NodeId:
        """
        Add a child with ``value`` to the current node and make it the current node.
        The first push creates the root. Return the handle of the new node.
        """
        nodes = self._nodes
        nid = self.key_type(len(nodes))

        if len(self._cursor) > 0:
            parent = self.key_type(self._cursor[-1])
        else:
            parent = None  # Root node.

        nodes.append(self.node_class(value, nid, parent))

        # Every node on the cursor is an ancestor of the new node.
        for pos in self._cursor:
            nodes[pos]._descendant_count += 1

        self._cursor.append(int(nid))

        return nid

    def up(self) -> NodeId:
        """
        Set the current node to its parent and return the handle of the new current node.
        CursorAtRoot exception is raised if the current node is the root (or the tree is empty).
        """
        if len(self._cursor) <= 1:
            raise CursorAtRoot('Cannot go up from the root node!' if self._cursor else 'The tree is empty!')

        self._cursor.pop()
        return self.key_type(self._cursor[-1])

    @property
    def root(self) -> Union[NodeId, None]:
        """
        The handle of the root node, None if the tree is empty.
        """
        if len(self._nodes) == 0:
            return None
        return self.key_type(0)

    @property
    def current(self) -> Union[NodeId, None]:
        """
        The handle of the current node (the parent of the next pushed node), None if the tree is empty.
        """
        if len(self._cursor) == 0:
            return None
        return self.key_type(self._cursor[-1])

    @property
    def cursor(self) -> Tuple[NodeId, ...]:
        """
        The handles from the root to the current node.
        """
        return tuple(self.key_type(pos) for pos in self._cursor)

    # SIMPLE READER FUNCTIONS ------------------------------------------------------------------------------------------
    def __len__(self) -> int:
        """
        Return the number of nodes in the tree.
        """
        return len(self._nodes)

    def is_empty(self) -> bool:
        """
        Return true if the tree has no nodes (and no root).
        """
        return len(self._nodes) == 0

    def __getitem__(self, node):
        """
        Return a Node instance for a handle if the tree contains it else raises IndexOutOfBounds.
        """
        return self._nodes[self._get_pos(node)]

    def get(self, node):
        """
        Get the Node instance for the given Node instance or handle. Same as ``tree[node]``.
        """
        return self[node]

    def get_node(self, node):
        """
        Get the Node instance for the given Node instance or handle.

        ``get_node()`` will return None if the position is not in the tree, whereas '[]' will raise
        ``IndexOutOfBounds``.
        """
        try:
            return self[node]
        except IndexOutOfBounds:
            return None

    def __contains__(self, node) -> bool:
        if isinstance(node, self.node_class):
            pos = node.nid
            # Only True if Node instances are equal, the handle is not enough!
            return pos is not None and 0 <= pos < len(self._nodes) and self._nodes[pos] == node
        try:
            self._get_pos(node)
        except (IndexOutOfBounds, TypeError):
            return False
        return True

    def __iter__(self):
        """
        Iterate through all the Node instances in the order they were pushed (pre-order).
        """
        return iter(self._nodes)

    def __eq__(self, other):
        if not isinstance(other, Tree):
            return NotImplemented
        return self._nodes == other._nodes and self._cursor == other._cursor

    __hash__ = None

    def first(self):
        """
        Get the first Node instance (the root) or None if the tree is empty.
        """
        return self._nodes[0] if len(self._nodes) > 0 else None

    def last(self):
        """
        Get the last pushed Node instance or None if the tree is empty.
        """
        return self._nodes[-1] if len(self._nodes) > 0 else None

    def get_nodes(self, lookup_nodes: bool = True):
        """
        Returns all Node instances (or handles if ``lookup_nodes`` is False) in an iterator in pre-order.
        """
        lookup_nodes_fun = self._get_lookup_nodes_fun(lookup_nodes)
        return (lookup_nodes_fun(curr_node) for curr_node in self._nodes)

    def is_ancestor(self, ancestor, child) -> bool:
        """
        Check if the ``ancestor`` the preceding nodes of ``child``.
        As subtrees are contiguous this is a range check on the positions.

        :param ancestor: The Node instance or handle.
        :param child: The Node instance or handle.
        :return: True or False
        """
        ancestor_pos = self._get_pos(ancestor)
        child_pos = self._get_pos(child)
        return ancestor_pos < child_pos <= ancestor_pos + self._nodes[ancestor_pos].descendant_count

    def depth(self, node=None) -> int:
        """
        Get the level for the given Node instance or handle in the tree (the root lives at level 0).
        If node is None get the maximum depth of this tree (0 for an empty tree).
        """
        if node is not None:
            return sum(1 for _ in self.ancestors(node))

        # Parents precede their children, so one pass over the node sequence is enough.
        levels = []
        for curr_node in self._nodes:
            levels.append(0 if curr_node.parent is None else levels[curr_node.parent] + 1)
        return max(levels, default=0)

    # TRAVERSAL FUNCTIONS ----------------------------------------------------------------------------------------------
    # The handle is checked when the method is called, the returned generator is lazy.
    def children(self, node, lookup_nodes: bool = True):
        """
        Return the iterator of direct children (Node instances or handles) of the given Node instance or handle
         in the order they were pushed.
        If there are no children return empty iterator.
        IndexOutOfBounds exception is thrown if the ``node`` does not exist in the tree.
        """
        pos = self._get_pos(node)
        return self._children_iter(pos, self._get_lookup_nodes_fun(lookup_nodes))

    def _children_iter(self, pos, lookup_nodes_fun):
        nodes = self._nodes
        last_pos = pos + nodes[pos].descendant_count
        child_pos = pos + 1
        while child_pos <= last_pos:
            child_node = nodes[child_pos]
            yield lookup_nodes_fun(child_node)
            child_pos += child_node.descendant_count + 1  # Skip the subtree of the child.

    def descendants(self, node, lookup_nodes: bool = True):
        """
        Return the iterator of all the descendants of the given Node instance or handle in pre-order,
         not including the node itself.
        IndexOutOfBounds exception is thrown if the ``node`` does not exist in the tree.
        """
        pos = self._get_pos(node)
        last_pos = pos + self._nodes[pos].descendant_count
        return self._range_iter(pos + 1, last_pos + 1, self._get_lookup_nodes_fun(lookup_nodes))

    def _range_iter(self, start, stop, lookup_nodes_fun):
        # Index into the subtree slice only, never walk the positions before it.
        nodes = self._nodes
        return (lookup_nodes_fun(nodes[curr_pos]) for curr_pos in range(start, stop))

    def ancestors(self, node, lookup_nodes: bool = True):
        """
        Traverse the tree branch bottom-up from the parent of a given Node instance or handle to the root
         (the root included, the node itself excluded).
        IndexOutOfBounds exception is thrown if the ``node`` does not exist in the tree.
        """
        pos = self._get_pos(node)
        return self._ancestors_iter(pos, self._get_lookup_nodes_fun(lookup_nodes))

    def _ancestors_iter(self, pos, lookup_nodes_fun):
        nodes = self._nodes
        parent = nodes[pos].parent
        while parent is not None:  # If parent is None we are at the root node.
            parent_node = nodes[parent]
            yield lookup_nodes_fun(parent_node)
            parent = parent_node.parent

    def siblings(self, node, lookup_nodes: bool = True):
        """
        Return the iterator of siblings of the given Node instance or handle ``node``.
        If ``node`` is root (there are no siblings), empty iterator is returned.
        """
        pos = self._get_pos(node)
        parent = self._nodes[pos].parent
        if parent is None:
            return iter(())
        lookup_nodes_fun = self._get_lookup_nodes_fun(lookup_nodes)
        return (curr_node for curr_node in self._children_iter(parent, lookup_nodes_fun)
                if self._get_pos(curr_node) != pos)

    def leaves(self, node=None, lookup_nodes: bool = True):
        """
        Get the iterator of leaves of the whole tree (if node is None)
         or a subtree (if node is a Node instance or handle). A leaf is the only leaf of its own subtree.
        If tree is empty (i.e. it has no root node) empty iterator is returned.
        """
        return (curr_node for curr_node in self.expand_tree(node, lookup_nodes=lookup_nodes)
                if self[curr_node].is_leaf())

    def paths_to_leaves(self, node=None):
        """
        Get the handles allowing to go from the root to each leaf of the tree (or the subtree of ``node``).

        :return: an iterator of tuples of handles, root is included into the path.

        For example:

        .. code-block:: python

            0
            ├── 1
            │   └── 2
            └── 3

        Expected result:

        .. code-block:: python

            [(NodeId(0), NodeId(1), NodeId(2)),
             (NodeId(0), NodeId(3)),
             ]

        """
        pos = self._check_initial_node(node)
        if pos is None:
            return iter(())  # Empty tree.
        return self._paths_iter(pos)

    def _paths_iter(self, pos):
        for leaf in self.leaves(pos, lookup_nodes=False):
            node_ids = [leaf]
            node_ids.extend(self.ancestors(leaf, lookup_nodes=False))
            node_ids.reverse()
            yield tuple(node_ids)

    def expand_tree(self, node=None, mode: int = DEPTH, lookup_nodes: bool = False):
        """
        Traverse the tree (or a subtree) top-down, starting with the given node.

        :param node: The Node instance or handle from which tree traversal will start.
             If None tree root will be used.
        :param mode: Traversal mode, may be either ``DEPTH`` (pre-order, the storage order) or ``WIDTH``.
        :param lookup_nodes: return Node instances or handles (default).
        :return: Node instances or handles in the defined order.
        :rtype: iterator.
        """
        pos = self._check_initial_node(node)
        if mode not in {self.DEPTH, self.WIDTH}:
            raise ValueError(f'Traversal mode ({mode}) is not supported!')
        if pos is None:
            return iter(())  # Empty tree.

        lookup_nodes_fun = self._get_lookup_nodes_fun(lookup_nodes)
        if mode == self.DEPTH:
            last_pos = pos + self._nodes[pos].descendant_count
            return self._range_iter(pos, last_pos + 1, lookup_nodes_fun)
        return self._width_iter(pos, lookup_nodes_fun)

    def _width_iter(self, pos, lookup_nodes_fun):
        queue = deque([self._nodes[pos]])
        while len(queue) > 0:
            curr_node = queue.popleft()
            yield lookup_nodes_fun(curr_node)
            queue.extend(self._children_iter(curr_node.nid, lambda x: x))

    # PRINT RELATED FUNCTIONS ------------------------------------------------------------------------------------------
    def __str__(self):
        return self.show()

    def show(self, node=None, line_type='ascii-ex', get_label_fun=lambda node: node.value, record_end='\n'):
        """
        Return the tree structure as string in hierarchy style.

        :param node: the reference Node instance or handle to start expanding.
        :param line_type: such as 'ascii', 'ascii-ex' (default), 'ascii-exr', 'ascii-em', 'ascii-emv', 'ascii-emh'
            to the change graphical form.
        :param get_label_fun: A function to define how to print labels
        :param record_end: The ending character for each record (e.g. newline)

        For example:

        .. code-block:: bash

            0
            ├── 1
            │   └── 2
            └── 3
        """
        return ''.join(self.show_iter(node, line_type, get_label_fun, record_end))

    def show_iter(self, node=None, line_type='ascii-ex', get_label_fun=lambda node: node.value, record_end='\n'):
        """
        Same as show(), but returns an iterator.
        """
        pos = self._check_initial_node(node)
        if pos is None:
            yield f'{self.__class__.__name__}()'  # Empty tree.
            return

        # Set line types
        line_elems = self._dt.get(line_type)
        if line_elems is None:
            raise ValueError(f'Undefined line type ({line_type})! Must choose from {set(self._dt)}!')

        for pre, curr_node in self._print_backend(pos, *line_elems):
            label = get_label_fun(curr_node)
            yield f'{pre}{label}{record_end}'

    def _print_backend(self, pos, dt_vertical_line, dt_line_tee, dt_line_corner):
        # Walks the subtree slice, keeping the last position and the is-last flag of every open ancestor.
        nodes = self._nodes
        yield '', nodes[pos]

        last_pos = pos + nodes[pos].descendant_count
        ends = [last_pos]
        is_last = []
        for curr_pos in range(pos + 1, last_pos + 1):
            while ends[-1] < curr_pos:  # Close finished subtrees.
                ends.pop()
                is_last.pop()

            curr_node = nodes[curr_pos]
            curr_last_pos = curr_pos + curr_node.descendant_count
            curr_is_last = curr_last_pos == ends[-1]  # Its subtree ends where the parent's does.

            lines = [' ' * 4 if flag else dt_vertical_line + ' ' * 3 for flag in is_last]
            lines.append(dt_line_corner if curr_is_last else dt_line_tee)
            yield ''.join(lines), curr_node

            ends.append(curr_last_pos)
            is_last.append(curr_is_last)
