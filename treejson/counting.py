from .traversal import get_children, flatten_tree


def calc_full_tip_counts(node):
    """
    Set node["fullTipCount"] for the node and all its descendants: the number
    of tips in the subtree (1 for a tip). Post-order, uses node["children"].
    Children follow their parent in pre-order, so walking the pre-order list
    backwards visits every child before its parent.

    Returns
    -------
     int
        full tip count of *node*
    """
    for n in reversed(flatten_tree(node)):
        children = get_children(n)
        if children:
            n["fullTipCount"] = sum([c["fullTipCount"] for c in children])
        else:
            n["fullTipCount"] = 1
    return node["fullTipCount"]


def count_tips(nodes):
    """number of nodes without children in a flattened node list"""
    return len([n for n in nodes if not get_children(n)])
