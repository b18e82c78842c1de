import time
import numpy as np
from treejson import config as tjconf
from treejson import TreeJsonError, MissingDataError
from .forest import build_forest
from .counting import calc_full_tip_counts
from .names import process_nodes
from .node_helpers import is_vaccine
from .annotations import process_branch_labels_in_place, collect_observed_mutations
from .traversal import path_to_root
from .utils import print_log, default_logger


def get_default_tree_state():
    """
    State of a tree before any dataset is loaded. A new dictionary is
    returned on every call.
    """
    return {
        "loaded": False,
        "nodes": None,
        "name": None,
        "vaccines": False,
        "observedMutations": {},
        "availableBranchLabels": [],
        "selectedStrain": None,
        "selectedClade": None,
        "totalStateCounts": {},
        "visibility": None,
        "nodeColors": None,
        "tipRadii": None,
    }


def normalize_tree_json(tree_json):
    """
    Return the tree json as a list of root nodes: a single tree (dict) is
    wrapped in a list, a list of trees is returned as is.
    """
    if tree_json is None:
        raise MissingDataError("no tree supplied")
    if isinstance(tree_json, dict):
        return [tree_json]
    if isinstance(tree_json, list):
        if not tree_json:
            raise MissingDataError("empty list of trees supplied")
        return tree_json
    raise TreeJsonError("tree json has to be a node (dict) or a list of nodes, found %s"%type(tree_json).__name__)


def add_parent_info(nodes):
    """
    Store the parent of each node in node["parentInfo"]["original"]. This is
    where information on alternative parents (e.g. recombination) would go.
    """
    for n in nodes:
        n["parentInfo"] = {"original": n["parent"]}


def tree_json_to_state(tree_json, logger=None, rng=None):
    """
    Convert one or several tree json documents into the flat tree state.

    The trees are joined under a synthetic root, flattened in pre-order and
    decorated with `arrayIdx`, `hasChildren`, `parent`, `parentInfo` and
    `fullTipCount`. Missing and duplicated names are replaced.

    Parameters
    ----------
     tree_json : dict, list
        root node of a tree json, or list of root nodes. The nodes are
        modified in place.

     logger : callable, optional
        logger(msg, level, warn=False, only_once=False) used for warnings

     rng : numpy.random.Generator, optional
        random number generator used for generated names

    Returns
    -------
     dict
        default tree state updated with nodes, vaccines, observedMutations,
        availableBranchLabels and loaded=True

    Raises
    ------
     MissingDataError
        if no tree is given

     TreeJsonError
        if the input isn't a tree (or list of trees) of node dictionaries
    """
    if logger is None:
        logger = default_logger
    trees = normalize_tree_json(tree_json)

    nodes = build_forest(trees)
    calc_full_tip_counts(nodes[0])
    process_nodes(nodes, logger=logger, rng=rng)
    add_parent_info(nodes)
    vaccines = [n for n in nodes if is_vaccine(n)]
    available_branch_labels = process_branch_labels_in_place(nodes)
    observed_mutations = collect_observed_mutations(nodes)

    state = get_default_tree_state()
    state.update({
        "nodes": nodes,
        "vaccines": vaccines,
        "observedMutations": observed_mutations,
        "availableBranchLabels": available_branch_labels,
        "loaded": True
    })
    return state


class TreeJson(object):
    """
    Flat, indexed representation of one or several tree json documents.
    Wraps `tree_json_to_state` and provides lookups on the result.
    """

    def __init__(self, tree_json=None, verbose=tjconf.VERBOSE, rng_seed=None):
        """
        Ingest the tree json. Nodes of *tree_json* are modified in place.

        Parameters
        ----------
        tree_json : dict, list
           root node of a tree json or a list of root nodes

        verbose : int
           Verbosity level as number from 0 (lowest) to 10 (highest).

        rng_seed : int, optional
           seed for the random number generator used to name unnamed nodes
           and to disambiguate duplicated names

        """
        if tree_json is None:
            raise MissingDataError("TreeJson requires a tree!")
        self.t_start = time.time()
        self.verbose = verbose
        self.log_messages = set()
        self.warnings = []
        self.rng = np.random.default_rng(rng_seed)
        self.logger("TreeJson: set-up",1)

        self.state = tree_json_to_state(tree_json, logger=self.logger, rng=self.rng)
        self._nodes_by_name = {n["name"]:n for n in self.nodes}
        self.logger("TreeJson: ingested %d nodes and %d tips in %d tree(s)"
                    %(len(self.nodes), self.root["fullTipCount"], len(self.root["children"])), 2)


    def logger(self, msg, level, warn=False, only_once=False):
        """
        Print log message *msg* to stdout. Warnings are also kept in
        `self.warnings`.

        Parameters
        -----------

         msg : str
            String to print on the screen

         level : int
            Log-level. Only the messages with a level higher than the
            current verbose level will be shown.

         warn : bool
            Warning flag. If True, the message will be displayed
            regardless of its log-level.

        """
        if only_once and msg in self.log_messages:
            return

        self.log_messages.add(msg)
        if warn:
            self.warnings.append(msg)
        print_log(msg, level, self.verbose, self.t_start, warn=warn)


    @property
    def nodes(self):
        return self.state["nodes"]

    @property
    def root(self):
        """the synthetic root joining all trees"""
        return self.nodes[0]

    @property
    def vaccines(self):
        return self.state["vaccines"]

    @property
    def observed_mutations(self):
        return self.state["observedMutations"]

    @property
    def available_branch_labels(self):
        return self.state["availableBranchLabels"]

    @property
    def nodes_by_name(self):
        """
        The :code:`{name:node}` dictionary. Names are unique after ingestion.
        """
        return self._nodes_by_name

    @property
    def tips(self):
        return [n for n in self.nodes if not n["hasChildren"]]

    def get_node(self, idx):
        """node with array index *idx*"""
        if idx < 0 or idx >= len(self.nodes):
            raise IndexError("When looking for node '%d': index out of range"%idx)
        return self.nodes[idx]

    def path_to_root(self, node):
        """
        Nodes from *node* to the root of its tree. The synthetic root is
        appended for nodes of any tree.
        """
        path = path_to_root(node)
        if path[-1] is not self.root:
            path.append(self.root)
        return path
