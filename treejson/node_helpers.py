"""
Named lookups of node attributes. Traits on `node_attrs` are either bare
values (e.g. `div`) or records such as `{"value": 2014.5, "confidence": [...]}`,
these helpers hide the difference from the rest of the package.
"""
from treejson import config as tjconf
from .utils import is_value_valid


def get_div_from_node(node):
    """Divergence of the node, None if absent."""
    node_attrs = node.get("node_attrs")
    if node_attrs and node_attrs.get(tjconf.DIV_TRAIT) is not None:
        return node_attrs[tjconf.DIV_TRAIT]
    return None


def get_trait_from_node(node, trait, entropy=False, confidence=False):
    """
    Value of a trait stored on node["node_attrs"].

    Parameters
    ----------
     node : dict
        tree json node

     trait : str
        name of the trait, e.g. "num_date" or "country"

     entropy : bool
        return the entropy of the trait instead of its value

     confidence : bool
        return the confidence of the trait instead of its value

    Returns
    -------
        the requested quantity or None if it isn't present (or, for values,
        isn't valid)
    """
    node_attrs = node.get("node_attrs")
    if not node_attrs or node_attrs.get(trait) is None:
        return None
    record = node_attrs[trait]
    if entropy or confidence:
        if not isinstance(record, dict):
            return None
        return record.get("entropy") if entropy else record.get("confidence")

    value = record.get("value") if isinstance(record, dict) else record
    if not is_value_valid(value):
        return None
    return value


def get_vaccine_from_node(node):
    """Vaccine record of the node (a dict such as {"serum": True}), None if absent."""
    node_attrs = node.get("node_attrs")
    if node_attrs and node_attrs.get("vaccine"):
        return node_attrs["vaccine"]
    return None


def is_vaccine(node):
    # a record with a lone default key carries no vaccine information
    vaccine = get_vaccine_from_node(node)
    if not isinstance(vaccine, dict) or not vaccine:
        return False
    return len(vaccine)>1 or list(vaccine.keys())[0]!=tjconf.DEFAULT_VACCINE_KEY

