from treejson import MalformedTreeError


def get_children(node):
    """
    Return the list of children of a tree json node, an empty list for tips.
    Raises MalformedTreeError if the node isn't a dictionary or its children
    aren't a list.
    """
    if not isinstance(node, dict):
        raise MalformedTreeError("Tree nodes have to be dictionaries, found %s"%type(node).__name__)
    children = node.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise MalformedTreeError("The children of node '%s' are not a list"%node.get("name"))
    return children


def _mark_visited(node, visited):
    if id(node) in visited:
        raise MalformedTreeError("Node '%s' was reached twice during traversal: "
                                 "the input is not a tree (shared node or cycle)"%node.get("name"))
    visited.add(id(node))


def flatten_tree(root, visited=None):
    """
    Pre-order tree traversal using an explicit stack. Children are pushed in
    reverse order such that they are visited left to right.

    Parameters
    ----------
     root : dict
        deserialized tree json root to begin traversal

     visited : set, optional
        ids of nodes that were already visited. Passing the same set to
        several calls detects nodes shared between trees.

    Returns
    -------
     list
        all nodes of the tree in pre-order, parents before their descendants
    """
    if visited is None:
        visited = set()
    stack, nodes = [root], []
    while stack:
        node = stack.pop()
        children = get_children(node)
        _mark_visited(node, visited)
        nodes.append(node)
        stack.extend(reversed(children))
    return nodes


def append_parents_to_tree(root):
    """
    Add a reference node["parent"] to every node of the tree. The root is its
    own parent, such that walking towards the root can stop at
    `node["parent"] is node`.
    """
    get_children(root)
    root["parent"] = root
    visited = set()
    stack = [root]
    while stack:
        node = stack.pop()
        _mark_visited(node, visited)
        children = get_children(node)
        for child in reversed(children):
            get_children(child)
            child["parent"] = node
            stack.append(child)


def path_to_root(node):
    """
    List of nodes from *node* up to the root of its tree (inclusive), following
    the parent references set by `append_parents_to_tree`.
    """
    path = [node]
    while node["parent"] is not node:
        node = node["parent"]
        path.append(node)
    return path
