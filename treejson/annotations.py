from collections import Counter, defaultdict
from dataclasses import dataclass
import json
import numpy as np
from scipy.stats import poisson
from treejson import config as tjconf
from .utils import default_logger


def process_branch_labels_in_place(nodes):
    """
    Scan the tree for `node["branch_attrs"]["labels"]` dictionaries and collect
    all available label categories (the options for choosing branch labels).
    All label values are cast to strings in place.

    Parameters
    ----------
     nodes : list
        flattened tree nodes

    Returns
    -------
     list
        "none" followed by the label categories in the order they were first seen
    """
    available_branch_labels = {}
    for n in nodes:
        labels = (n.get("branch_attrs") or {}).get("labels")
        if not labels:
            continue
        for label_name in labels:
            available_branch_labels[label_name] = True
            labels[label_name] = _label_to_str(labels[label_name])
    return [tjconf.NONE_BRANCH_LABEL] + list(available_branch_labels)


def _label_to_str(value):
    # match the JSON spelling of null, booleans, integral floats and containers
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def collect_observed_mutations(nodes):
    """
    Collect all mutations on the tree.

    Parameters
    ----------
     nodes : list
        flattened tree nodes

    Returns
    -------
     dict
        keys are mutations in gene:fromPosTo format (e.g. nuc:A123T),
        values are the number of occurrences on the tree
    """
    mutations = defaultdict(int)
    for n in nodes:
        branch_mutations = (n.get("branch_attrs") or {}).get("mutations")
        if not branch_mutations:
            continue
        for gene, muts in branch_mutations.items():
            for mut in muts:
                mutations["%s:%s"%(gene, mut)] += 1
    return dict(mutations)


def collect_mutations_on_branch(node):
    """
    Mutations on the branch leading to *node* as gene:PosTo strings, i.e.
    without the ancestral state (e.g. nuc:123T).
    """
    muts = []
    for gene, changes in ((node.get("branch_attrs") or {}).get("mutations") or {}).items():
        for m in changes:
            muts.append("%s:%s"%(gene, m[1:]))
    return muts


def collect_genotype_options(nodes):
    """distinct gene:PosTo mutations across the tree, in the order they are encountered"""
    options = {}
    for n in nodes:
        for mut in collect_mutations_on_branch(n):
            options[mut] = True
    return list(options)


def collect_sample_names(nodes):
    """names of all tips, requires `hasChildren` to be set"""
    return [n["name"] for n in nodes if not n["hasChildren"]]


@dataclass
class Mutation:
    """
    Single change of a branch mutation, e.g. A123T. `pos` is zero-based.
    """
    gene: str
    ref: str
    pos: int
    qry: str

    def __str__(self):
        return f"{self.gene}:{self.ref}{self.pos + 1}{self.qry}"

    @classmethod
    def from_str(cls, mut_str, gene=tjconf.NUC_GENE):
        """
        Parse a mutation string. Both 'A123T' and the tally keys 'nuc:A123T'
        are accepted, the gene in the string takes precedence over *gene*.
        """
        if ':' in mut_str:
            gene, mut_str = mut_str.rsplit(':', 1)
        if len(mut_str) < 3:
            raise ValueError(f"Invalid mutation: '{mut_str}'")

        try:
            pos = int(mut_str[1:-1]) - 1
        except ValueError:
            raise ValueError(f"Invalid mutation: '{mut_str}': position must be an integer")
        if pos < 0:
            raise ValueError(f"Invalid mutation: '{mut_str}': positions are one-based")

        return cls(gene, mut_str[0], pos, mut_str[-1])

    def is_del(self):
        return self.qry == '-'


def mutation_multiplicities(observed_mutations):
    """
    Histogram of mutation multiplicities: entry k is the number of distinct
    mutations that were observed k times on the tree.
    """
    if not observed_mutations:
        return np.zeros(1, dtype=int)
    return np.bincount(list(observed_mutations.values()))


def homoplasy_summary(observed_mutations, genome_length=None, n=tjconf.N_TOP_MUTATIONS, logger=None):
    """
    Summarise recurrent mutations (homoplasies) in a mutation tally.

    Parameters
    ----------
     observed_mutations : dict
        mutation tally as returned by `collect_observed_mutations`

     genome_length : int, optional
        number of positions that could mutate. If given, the number of
        positions hit k times is compared to a Poisson distribution with
        the same mean.

     n : int
        number of most frequent mutations to report

     logger : callable, optional
        logger(msg, level, warn=False, only_once=False)

    Returns
    -------
     dict
        total_mutations, nuc_mutations (nucleotide changes without gaps or
        N, these make up position_multiplicities and set the Poisson mean),
        multiplicities, position_multiplicities,
        expected_position_multiplicities (None without genome_length) and
        top_mutations, a list of (mutation, count) observed more than once
    """
    if logger is None:
        logger = default_logger

    # positions are genome positions: only nucleotide changes between unambiguous states
    positions = Counter()
    nuc_mutations = 0
    for key, count in observed_mutations.items():
        try:
            mut = Mutation.from_str(key)
        except ValueError as e:
            logger("homoplasy_summary: skipping mutation: %s"%e, 2, warn=True, only_once=True)
            continue
        if mut.gene != tjconf.NUC_GENE:
            continue
        if '-' not in [mut.ref, mut.qry] and 'N' not in [mut.ref, mut.qry]:
            positions[mut.pos] += count
            nuc_mutations += count

    total_mutations = int(sum(observed_mutations.values()))
    position_multiplicities = np.bincount(list(positions.values())) if positions else np.zeros(1, dtype=int)
    expected = None
    if genome_length:
        if genome_length < len(positions):
            logger("homoplasy_summary: genome length %d is smaller than the number of mutated positions %d"
                   %(genome_length, len(positions)), 1, warn=True)
        position_multiplicities[0] = genome_length - np.sum(position_multiplicities)
        expected = genome_length*poisson.pmf(np.arange(len(position_multiplicities)),
                                             1.0*nuc_mutations/genome_length)

    ranked = sorted(observed_mutations.items(), key=lambda x:(-x[1], x[0]))
    top_mutations = [(mut, count) for mut, count in ranked[:n] if count>1]

    return {"total_mutations": total_mutations,
            "nuc_mutations": nuc_mutations,
            "multiplicities": mutation_multiplicities(observed_mutations),
            "position_multiplicities": position_multiplicities,
            "expected_position_multiplicities": expected,
            "top_mutations": top_mutations}
