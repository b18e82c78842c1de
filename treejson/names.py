import numpy as np
from treejson import config as tjconf
from .traversal import get_children
from .utils import default_logger

BASE36_DIGITS = np.array(list("0123456789abcdefghijklmnopqrstuvwxyz"))


def pseudo_random_name(rng=None, length=tjconf.PSEUDO_RANDOM_NAME_LENGTH):
    """
    Random lower case alphanumeric string used to name unnamed nodes and to
    disambiguate duplicated names.

    Parameters
    ----------
     rng : numpy.random.Generator, optional
        random number generator, a fresh unseeded generator is used if None

     length : int
        number of characters
    """
    if rng is None:
        rng = np.random.default_rng()
    return "".join(rng.choice(BASE36_DIGITS, size=length))


def process_nodes(nodes, logger=None, rng=None):
    """
    Add `arrayIdx` and `hasChildren` to each node of a flattened node list and
    make sure that every node has a non-empty name that is unique within the
    list. Missing or duplicated names are an error in the dataset, they are
    replaced (with a warning) rather than failing downstream.

    Parameters
    ----------
     nodes : list
        flattened tree nodes, the order determines the array indices

     logger : callable, optional
        logger(msg, level, warn=False) used for warnings

     rng : numpy.random.Generator, optional
        random number generator for generated names

    Returns
    -------
     list
        the input list, nodes are modified in place
    """
    if logger is None:
        logger = default_logger
    if rng is None:
        rng = np.random.default_rng()

    node_names_seen = set()
    for idx, node in enumerate(nodes):
        node["arrayIdx"] = idx
        node["hasChildren"] = len(get_children(node))>0

        if not node.get("name"):
            node["name"] = pseudo_random_name(rng)
            while node["name"] in node_names_seen:
                node["name"] = pseudo_random_name(rng)
            logger("Tree node without a name detected. Using the name '%s' and continuing..."%node["name"], 1, warn=True)
        if node["name"] in node_names_seen:
            prev = node["name"]
            while node["name"] in node_names_seen:
                node["name"] = "%s%s%s"%(prev, tjconf.NAME_SUFFIX_SEPARATOR, pseudo_random_name(rng))
            logger("Tree node detected with a duplicate name. Changing '%s' to '%s' and continuing..."%(prev, node["name"]), 1, warn=True)
        node_names_seen.add(node["name"])

    return nodes
