version="0.3.0"
## Here we define an error class for TreeJson errors. MissingData and MalformedTree errors
## are due to incorrect calling of treejson functions or input data that does not fit our base assumptions.
## Errors marked as TreeJsonUnknownErrors might be due to data not fulfilling base assumptions or due
## to bugs in treejson. Please report them to the developers if they persist.
class TreeJsonError(Exception):
    """
    TreeJsonError class
    Parent class for more specific errors
    Raised when treejson is used incorrectly in contrast with `TreeJsonUnknownError`
    `TreeJsonUnknownError` is raised when the reason of the error is unknown, could indicate bug
    """
    pass

class MissingDataError(TreeJsonError):
    """MissingDataError class raised when no tree is supplied or a tree file is missing"""
    pass

class MalformedTreeError(TreeJsonError):
    """MalformedTreeError class raised when a tree document is not a tree of node dictionaries"""
    pass

class TreeJsonUnknownError(Exception):
    """TreeJsonUnknownError class raised when ingestion fails for an unknown reason. This might be due to data not fulfilling base assumptions or due to bugs in treejson. Please report them to the developers if they persist."""
    pass

import os, sys
recursion_limit = os.environ.get("TREEJSON_RECURSION_LIMIT")
if recursion_limit:
    sys.setrecursionlimit(int(recursion_limit))
else:
    sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))

from .traversal import flatten_tree, append_parents_to_tree
from .forest import build_forest
from .tree_state import TreeJson, tree_json_to_state, get_default_tree_state
from .annotations import collect_observed_mutations, process_branch_labels_in_place
from .argument_parser import make_parser
