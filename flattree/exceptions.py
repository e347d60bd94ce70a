class CursorAtRoot(Exception):
    """
    Exception throwed in Tree.up() if the cursor has no parent left to ascend to (unbalanced push/up calls).
    """
    pass


class IndexOutOfBounds(IndexError):
    """
    Exception throwed if a node's position (handle) is not in the node sequence of a tree.
    """
    pass
