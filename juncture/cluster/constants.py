from ..constants import CLUSTER_METHOD, positive_integer
from ..util import NullableType, WeakJunctureNamespace


PARTITION_MAX_DISTANCE = 50
""":class:`int`: maximum distance (bp) between consecutive mates of a partition"""

MAX_PARTITION_SIZE = 200
""":class:`int`: the largest partition which is clustered without subsampling"""

DEFAULTS = WeakJunctureNamespace()
"""
- clustering_cutoff
- clustering_method
- concurrency_limit
- max_partition_size
- partition_max_distance
- subsample_seed
"""
DEFAULTS.add(
    'clustering_cutoff',
    0.5,
    cast_type=float,
    defn='the distance at which the dendrogram of a partition is cut. Junctions are only clustered together when '
    'they are joined by merges with an average linkage distance below this value',
)
DEFAULTS.add(
    'clustering_method',
    CLUSTER_METHOD.HIERARCHICAL,
    cast_type=CLUSTER_METHOD,
    defn='the method used to cluster the junctions',
)
DEFAULTS.add(
    'partition_max_distance',
    PARTITION_MAX_DISTANCE,
    cast_type=positive_integer,
    defn='maximum distance between the positions of consecutive junction mates for them to be placed in the same '
    'partition prior to clustering',
)
DEFAULTS.add(
    'max_partition_size',
    MAX_PARTITION_SIZE,
    cast_type=positive_integer,
    defn='partitions with more junctions than this are randomly subsampled to this size before clustering',
)
DEFAULTS.add(
    'subsample_seed',
    None,
    cast_type=NullableType(int),
    defn='seed for the random subsampling of oversized partitions. A random seed is used when not given',
)
DEFAULTS.add(
    'concurrency_limit',
    1,
    cast_type=positive_integer,
    defn='the number of processes used to cluster partitions',
)
