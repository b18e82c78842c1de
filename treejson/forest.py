from treejson import config as tjconf
from .traversal import flatten_tree, append_parents_to_tree
from .node_helpers import get_div_from_node, get_trait_from_node


def make_subtree_root_node(nodes, subtree_indices):
    """
    Create the synthetic root that joins all subtrees of a dataset.

    Parameters
    ----------
     nodes : list
        concatenated flattened subtrees (without the synthetic root)

     subtree_indices : list
        index into *nodes* of the root of each subtree

    Returns
    -------
     dict
        root node. Its children are the original subtree roots, it is its own
        parent and it is always hidden. It carries the minimal divergence and
        date observed across the subtree roots, if any root has these.
    """
    node = {
        "name": tjconf.ROOT_NAME,
        "node_attrs": {"hidden": tjconf.HIDDEN_ALWAYS},
        "children": [nodes[idx] for idx in subtree_indices]
    }
    node["parent"] = node

    observed_divs = [d for d in map(get_div_from_node, node["children"]) if d is not None]
    if observed_divs:
        node["node_attrs"][tjconf.DIV_TRAIT] = min(observed_divs)
    observed_dates = [t for t in (get_trait_from_node(n, tjconf.NUM_DATE_TRAIT) for n in node["children"])
                      if t is not None]
    if observed_dates:
        node["node_attrs"][tjconf.NUM_DATE_TRAIT] = {"value": min(observed_dates)}
    return node


def build_forest(trees):
    """
    Link parents, flatten and concatenate several trees and join them under a
    synthetic root.

    Parameters
    ----------
     trees : list
        tree json root nodes

    Returns
    -------
     list
        flattened nodes, index 0 is the synthetic root, followed by the nodes
        of each tree in pre-order and in the order the trees were given

    Raises
    ------
     MalformedTreeError
        if a node is reached twice, within a tree or across trees
    """
    nodes = []
    subtree_indices = []
    visited = set()
    for tree_root in trees:
        append_parents_to_tree(tree_root)
        subtree_indices.append(len(nodes))
        nodes.extend(flatten_tree(tree_root, visited=visited))
    nodes.insert(0, make_subtree_root_node(nodes, subtree_indices))
    return nodes
