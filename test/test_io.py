import json
from io import StringIO
import pandas as pd
import pytest
from Bio import Phylo
from treejson import TreeJson, MissingDataError, TreeJsonError, make_parser
from treejson.io import read_tree_json, read_tree, tree_json_from_phylo, nodes_to_dataframe


def auspice_dataset():
    return {"version": "v2",
            "meta": {"title": "test", "panels": ["tree"]},
            "tree": {"name": "root", "node_attrs": {"div": 0.0},
                     "children": [
                         {"name": "A", "node_attrs": {"div": 0.1, "num_date": {"value": 2020.1}},
                          "branch_attrs": {"mutations": {"nuc": ["C241T"]}, "labels": {"clade": "A"}}},
                         {"name": "B", "node_attrs": {"div": 0.2, "num_date": {"value": 2020.3}},
                          "branch_attrs": {"mutations": {"nuc": ["C241T", "G300A"]}}},
                         {"name": "B", "node_attrs": {"div": 0.3}}]}}


def write_json(path, data):
    with open(path, 'w') as fh:
        json.dump(data, fh)
    return str(path)


def test_read_tree_json(tmp_path):
    fname = write_json(tmp_path/"dataset.json", auspice_dataset())
    tree = read_tree_json(fname)
    assert tree["name"] == "root"
    assert len(tree["children"]) == 3

    fname = write_json(tmp_path/"trees.json", [{"name": "a"}, {"name": "b"}])
    assert [t["name"] for t in read_tree_json(fname)] == ["a", "b"]


def test_read_tree_json_errors(tmp_path):
    with pytest.raises(MissingDataError):
        read_tree_json(str(tmp_path/"missing.json"))
    bad = tmp_path/"bad.json"
    bad.write_text("{not json")
    with pytest.raises(TreeJsonError):
        read_tree_json(str(bad))


def test_tree_json_from_phylo():
    tree = Phylo.read(StringIO("((A:0.1,B:0.2)AB:0.1,C:0.3)root;"), "newick")
    tree_json = tree_json_from_phylo(tree)
    assert tree_json["name"] == "root"
    assert [c["name"] for c in tree_json["children"]] == ["AB", "C"]
    ab = tree_json["children"][0]
    assert [c["name"] for c in ab["children"]] == ["A", "B"]
    assert tree_json["node_attrs"]["div"] == 0.0
    assert ab["node_attrs"]["div"] == pytest.approx(0.1)
    assert ab["children"][1]["node_attrs"]["div"] == pytest.approx(0.3)
    assert "children" not in tree_json["children"][1]


def test_unnamed_newick_nodes_are_named():
    tree_json = tree_json_from_phylo(Phylo.read(StringIO("((A:1,B:1):1,(C:1,D:1):1);"), "newick"))
    assert "name" not in tree_json
    tj = TreeJson(tree_json, verbose=0)
    assert len(tj.nodes) == 8
    assert len(tj.warnings) == 3
    assert len(tj.nodes_by_name) == 8
    assert tj.root["fullTipCount"] == 4


def test_read_tree(tmp_path):
    nwk = tmp_path/"tree.nwk"
    nwk.write_text("((A:0.1,B:0.2):0.1,C:0.3);\n")
    tree_json = read_tree(str(nwk))
    assert len(tree_json["children"]) == 2
    fname = write_json(tmp_path/"dataset.json", auspice_dataset())
    assert read_tree(fname)["name"] == "root"
    with pytest.raises(MissingDataError):
        read_tree(str(tmp_path/"missing.nwk"))


def test_nodes_to_dataframe():
    tj = TreeJson(auspice_dataset()["tree"], verbose=0)
    df = nodes_to_dataframe(tj.nodes)
    assert len(df) == 5
    assert df.index.name == "arrayIdx"
    assert df.loc[0, "name"] == "__ROOT"
    assert df.loc[0, "parent"] == 0
    assert df.loc[2, "parent"] == 1
    assert df.loc[0, "fullTipCount"] == 3
    assert df.loc[0, "div"] == 0.0
    assert df.loc[0, "num_date"] is None or pd.isna(df.loc[0, "num_date"])
    assert df.loc[2, "num_date"] == 2020.1
    assert df["name"].is_unique


def test_cli_ingest(tmp_path, capsys):
    fname = write_json(tmp_path/"dataset.json", auspice_dataset())
    outdir = tmp_path/"out"
    params = make_parser().parse_args(["ingest", "--tree", fname, fname, "--outdir", str(outdir), "--verbose", "0"])
    assert params.func(params) == 0
    df = pd.read_csv(outdir/"nodes.tsv", sep='\t', index_col=0)
    # both copies of the tree are joined under one root
    assert len(df) == 9
    assert df.loc[0, "fullTipCount"] == 6
    assert df["name"].is_unique
    out = capsys.readouterr().out
    assert "read 2 tree(s) with 9 nodes and 6 tips" in out


def test_cli_mutations(tmp_path, capsys):
    fname = write_json(tmp_path/"dataset.json", auspice_dataset())
    params = make_parser().parse_args(["mutations", "--tree", fname, "--genome-length", "1000", "--verbose", "0"])
    assert params.func(params) == 0
    out = capsys.readouterr().out
    assert "3 mutations were observed" in out
    assert "nuc:C241T\t2" in out


def test_cli_missing_tree(tmp_path, capsys):
    params = make_parser().parse_args(["ingest", "--tree", str(tmp_path/"missing.json"),
                                       "--outdir", str(tmp_path/"out"), "--verbose", "0"])
    assert params.func(params) == 1
    assert "Tree loading failed" in capsys.readouterr().out
