#!/usr/bin/env python
import argparse
from treejson.wrappers import ingest, scan_mutations
import treejson
from treejson import config as tjconf


treejson_description = \
    "treejson: flatten and index phylogenetic tree json\n\n"\
    "treejson implements the following sub-commands:\n\n"\
    "\t ingest\t\tjoin one or several trees, flatten them and write the node table.\n"\
    "\t mutations\ttally the mutations on the tree and summarise recurrent ones.\n\n"\
    "To print a description and argument list of the individual sub-commands, type:\n\n"\
    "\t treejson <subcommand> -h\n\n"

tree_description = "Name of one or several files containing trees in "\
    "Auspice json, newick or nexus format. The format is determined from the "\
    "file extension. Several trees are joined under a common hidden root."

ingest_description = \
    "Joins the trees under a common hidden root, flattens them in pre-order, "\
    "counts tips and makes node names unique. A summary is printed and the "\
    "table of nodes is written to 'nodes.tsv' in the output directory."

mutations_description = \
    "Tallies the mutations annotated on the branches of the trees and reports "\
    "how often mutations and positions are hit. If the genome length is given, "\
    "the distribution of hits per position is compared to a Poisson distribution "\
    "with the same mean. An excess of recurrent mutations might suggest "\
    "recombination, contamination or adaptation."


def add_common_args(parser):
    parser.add_argument('--tree', required=True, nargs='+', type=str, help=tree_description)
    parser.add_argument('--verbose', default=1, type=int,  help='verbosity of output 0-6')
    parser.add_argument('--rng-seed', type=int, help='seed for generated node names')


def make_parser():
    parser = argparse.ArgumentParser(description = "",
                                     usage=treejson_description)

    subparsers = parser.add_subparsers()

    ## INGEST
    i_parser = subparsers.add_parser('ingest', description=ingest_description)
    add_common_args(i_parser)
    i_parser.add_argument('--outdir', type=str,  help='directory to write the output to')
    i_parser.set_defaults(func=ingest)

    ## MUTATIONS
    m_parser = subparsers.add_parser('mutations', description=mutations_description)
    add_common_args(m_parser)
    m_parser.add_argument('--genome-length', type=int, help="number of positions of the genome, "
                          "used to compute the expected number of positions hit k times.")
    m_parser.add_argument('-n', default=tjconf.N_TOP_MUTATIONS, type=int, help="number of mutations to display")
    m_parser.set_defaults(func=scan_mutations)

    # make a version subcommand
    v_parser = subparsers.add_parser('version', description='print version')
    v_parser.set_defaults(func=lambda x: print(treejson.version))

    return parser
