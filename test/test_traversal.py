import pytest
from treejson import flatten_tree, append_parents_to_tree, MalformedTreeError
from treejson.traversal import path_to_root, get_children


def make_tree():
    return {"name": "root", "children": [
                {"name": "AB", "children": [{"name": "A"}, {"name": "B"}]},
                {"name": "C"},
                {"name": "DE", "children": [{"name": "D"}, {"name": "E", "children": []}]}
            ]}


def test_flatten_preorder():
    nodes = flatten_tree(make_tree())
    assert [n["name"] for n in nodes] == ["root", "AB", "A", "B", "C", "DE", "D", "E"]


def test_flatten_single_node():
    node = {"name": "A"}
    assert flatten_tree(node) == [node]


def test_flatten_keeps_identity():
    tree = make_tree()
    nodes = flatten_tree(tree)
    assert nodes[0] is tree
    assert nodes[1] is tree["children"][0]
    assert len({id(n) for n in nodes}) == len(nodes)


def test_append_parents():
    tree = make_tree()
    append_parents_to_tree(tree)
    assert tree["parent"] is tree
    for node in flatten_tree(tree):
        for child in node.get("children", []):
            assert child["parent"] is node


def test_path_to_root():
    tree = make_tree()
    append_parents_to_tree(tree)
    d = tree["children"][2]["children"][0]
    assert [n["name"] for n in path_to_root(d)] == ["D", "DE", "root"]
    assert path_to_root(tree) == [tree]


def test_deep_tree_does_not_recurse():
    # a ladder much deeper than the default recursion limit
    root = {"name": "n0"}
    node = root
    for i in range(1, 50000):
        child = {"name": "n%d"%i}
        node["children"] = [child]
        node = child
    append_parents_to_tree(root)
    nodes = flatten_tree(root)
    assert len(nodes) == 50000
    assert nodes[-1]["parent"] is nodes[-2]


def test_cycle_is_detected():
    a = {"name": "a"}
    b = {"name": "b", "children": [a]}
    a["children"] = [b]
    with pytest.raises(MalformedTreeError):
        flatten_tree(a)
    with pytest.raises(MalformedTreeError):
        append_parents_to_tree(a)


def test_shared_node_is_detected():
    shared = {"name": "s"}
    tree = {"name": "r", "children": [{"name": "x", "children": [shared]}, shared]}
    with pytest.raises(MalformedTreeError):
        flatten_tree(tree)


def test_malformed_children():
    with pytest.raises(MalformedTreeError):
        get_children({"name": "r", "children": {"name": "x"}})
    with pytest.raises(MalformedTreeError):
        append_parents_to_tree({"name": "r", "children": ["x"]})
    with pytest.raises(MalformedTreeError):
        flatten_tree({"name": "r", "children": [None]})
