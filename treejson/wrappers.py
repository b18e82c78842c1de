import os
from datetime import datetime
from . import TreeJson
from . import TreeJsonError
from .io import read_tree, nodes_to_dataframe
from .annotations import homoplasy_summary


def get_outdir(params, suffix='_treejson'):
    if params.outdir:
        if os.path.exists(params.outdir):
            if os.path.isdir(params.outdir):
                return params.outdir.rstrip('/') + '/'
            raise TreeJsonError("designated output location %s is not a directory"%params.outdir)
        os.makedirs(params.outdir)
        return params.outdir.rstrip('/') + '/'

    outdir_stem = datetime.now().date().isoformat()
    outdir = outdir_stem + suffix.rstrip('/')+'/'
    count = 1
    while os.path.exists(outdir):
        outdir = outdir_stem + '-%04d'%count + suffix.rstrip('/')+'/'
        count += 1

    os.makedirs(outdir)
    return outdir


def load_trees(params):
    """
    Read all trees given on the command line and ingest them.
    Returns None if reading or ingestion fails.
    """
    tree_json = []
    try:
        for fname in params.tree:
            trees = read_tree(fname)
            tree_json.extend(trees if isinstance(trees, list) else [trees])
        return TreeJson(tree_json, verbose=params.verbose, rng_seed=params.rng_seed)
    except TreeJsonError as e:
        print(e)
        print("Tree loading failed.")
        return None


def ingest(params):
    """
    the function implementing treejson ingest
    """
    tj = load_trees(params)
    if tj is None:
        return 1

    try:
        outdir = get_outdir(params, '_ingest')
    except TreeJsonError as e:
        print(e)
        return 1

    n_trees = len(tj.root["children"])
    print("\nread %d tree(s) with %d nodes and %d tips"%(n_trees, len(tj.nodes), tj.root["fullTipCount"]))
    if tj.warnings:
        print("%d node names were missing or duplicated and have been replaced"%len(tj.warnings))
    print("branch labels:\t%s"%", ".join(tj.available_branch_labels))
    print("vaccine strains:\t%s"%(", ".join(n["name"] for n in tj.vaccines) or "none"))
    print("distinct mutations:\t%d"%len(tj.observed_mutations))

    fname = outdir + 'nodes.tsv'
    nodes_to_dataframe(tj.nodes).to_csv(fname, sep='\t')
    print("\n--- node table saved as  \n\t %s\n"%fname)
    return 0


def scan_mutations(params):
    """
    the function implementing treejson mutations
    """
    tj = load_trees(params)
    if tj is None:
        return 1

    summary = homoplasy_summary(tj.observed_mutations, genome_length=params.genome_length,
                                n=params.n, logger=tj.logger)
    total_mutations = summary["total_mutations"]

    ###########################################################################
    ### Output the distribution of times particular mutations are observed
    ###########################################################################
    print("\n%d mutations were observed on the tree."%total_mutations)
    print("Of these %d mutations,"%total_mutations
            +"".join(['\n\t - %d occur %d times'%(n,mi)
                      for mi,n in enumerate(summary["multiplicities"]) if n]))

    ###########################################################################
    ### Output the distribution of times mutations at particular positions are observed
    ###########################################################################
    expected = summary["expected_position_multiplicities"]
    if expected is not None:
        print("\nOf the %d positions in the genome,"%params.genome_length
                +"".join(['\n\t - %d were hit %d times (expected %1.2f)'%(n,mi,expected[mi])
                          for mi,n in enumerate(summary["position_multiplicities"]) if n]))
    else:
        print("\nOf the mutated nucleotide positions,"
                +"".join(['\n\t - %d were hit %d times'%(n,mi)
                          for mi,n in enumerate(summary["position_multiplicities"]) if n and mi]))

    ###########################################################################
    ### Output the mutations that are observed most often
    ###########################################################################
    print("\n\nThe %d most homoplasic mutations are:\n\tmut\tmultiplicity"%params.n)
    for mut, count in summary["top_mutations"]:
        print("\t%s\t%d"%(mut, count))

    return 0
