
VERBOSE = 3

# synthetic root that joins all subtrees of a dataset
ROOT_NAME = "__ROOT"
HIDDEN_ALWAYS = "always"

# sentinel option of the branch label index ("no label selected")
NONE_BRANCH_LABEL = "none"

# generated names and name suffixes
PSEUDO_RANDOM_NAME_LENGTH = 6
NAME_SUFFIX_SEPARATOR = "_"

# a vaccine record consisting only of this key carries no vaccine information
DEFAULT_VACCINE_KEY = "serum"

# traits aggregated onto the synthetic root
DIV_TRAIT = "div"
NUM_DATE_TRAIT = "num_date"

# gene name of nucleotide mutations in branch_attrs["mutations"]
NUC_GENE = "nuc"

# node_attrs values that count as "no data"
INVALID_TRAIT_VALUES = ["unknown", "?", "nan", "na", "n/a", "", "unassigned"]

# homoplasy summary
N_TOP_MUTATIONS = 10
