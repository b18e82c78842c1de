import os, json
import pandas as pd
from Bio import Phylo
from Bio.Phylo.NewickIO import NewickError
from treejson import MissingDataError, TreeJsonError
from treejson import config as tjconf
from .node_helpers import get_div_from_node, get_trait_from_node


def read_tree_json(fname):
    """
    Read a tree json file. Accepts full Auspice v2 datasets, i.e.
    {"meta":..., "tree":...}, as well as files containing a bare tree or a
    list of trees.

    Returns
    -------
     dict, list
        root node or list of root nodes
    """
    if not os.path.isfile(fname):
        raise MissingDataError("tree file %s does not exist"%fname)
    with open(fname, encoding='utf-8') as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise TreeJsonError("file %s is not valid json: %s"%(fname, e))

    if isinstance(data, dict) and "tree" in data:
        return data["tree"]
    return data


def tree_json_from_phylo(tree):
    """
    Convert a Biopython tree into a tree json. Branch lengths are accumulated
    into node_attrs["div"], branch support values are kept as
    node_attrs["confidence"].

    Parameters
    ----------
     tree : Bio.Phylo.BaseTree.Tree, Bio.Phylo.BaseTree.Clade
        tree or clade to convert

    Returns
    -------
     dict
        root node of the tree json
    """
    root = tree.root if hasattr(tree, 'root') else tree

    def node_to_json(n, pdiv=0.0):
        j = {"node_attrs":{}, "branch_attrs":{}}
        if n.name:
            j["name"] = n.name
        if n.clades:
            j["children"] = []
        j["node_attrs"]["div"] = float(pdiv + (n.branch_length or 0.0))
        if n.confidence is not None:
            j["node_attrs"]["confidence"] = {"value": float(n.confidence)}
        return j

    tree_json = node_to_json(root, 0.0)
    # clade ids to json nodes, names are not guaranteed to be set or unique
    node_lookup = {id(root): tree_json}
    for n in root.find_clades(order='preorder'):
        n_json = node_lookup[id(n)]
        for c in n.clades:
            n_json["children"].append(node_to_json(c, n_json["node_attrs"]["div"]))
            node_lookup[id(c)] = n_json["children"][-1]
    return tree_json


def read_tree(fname, fmt=None):
    """
    Read a tree json, newick or nexus file and return a tree json. The format
    is inferred from the file extension unless *fmt* is given.
    """
    if not os.path.isfile(fname):
        raise MissingDataError("tree file %s does not exist"%fname)
    if fmt is None:
        ext = fname.lower().rsplit('.', 1)[-1]
        fmt = {'json':'json', 'nex':'nexus', 'nexus':'nexus'}.get(ext, 'newick')
    if fmt == 'json':
        return read_tree_json(fname)
    try:
        tree = Phylo.read(fname, fmt)
    except (ValueError, NewickError) as e:
        raise TreeJsonError("could not read tree from %s as %s: %s"%(fname, fmt, e))
    return tree_json_from_phylo(tree)


def nodes_to_dataframe(nodes):
    """
    Table of a flattened and processed node list, one row per node indexed by
    `arrayIdx`, with the array index of the parent, tip counts, divergence and
    numeric date.
    """
    rows = []
    for n in nodes:
        rows.append({
            "arrayIdx": n["arrayIdx"],
            "name": n["name"],
            "parent": n["parent"]["arrayIdx"],
            "hasChildren": n["hasChildren"],
            "fullTipCount": n["fullTipCount"],
            "div": get_div_from_node(n),
            "num_date": get_trait_from_node(n, tjconf.NUM_DATE_TRAIT),
        })
    return pd.DataFrame(rows, columns=["arrayIdx", "name", "parent", "hasChildren",
                                       "fullTipCount", "div", "num_date"]).set_index("arrayIdx")
