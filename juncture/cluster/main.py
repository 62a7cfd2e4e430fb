import os
import random
import time

from shortuuid import uuid

from ..constants import CLUSTER_METHOD, COLUMNS, sort_columns
from ..util import LOG, generate_complete_stamp, mkdirp, output_tabbed_file, read_inputs
from .cluster import simple_clustering_method
from .constants import DEFAULTS
from .hierarchical import hierarchical_clustering_method

JUNCTION_HEADER = sort_columns([
    COLUMNS.mate1_seq_name,
    COLUMNS.mate1_position,
    COLUMNS.mate1_orientation,
    COLUMNS.mate2_seq_name,
    COLUMNS.mate2_position,
    COLUMNS.mate2_orientation,
    COLUMNS.inserted_sequence,
    COLUMNS.read_name,
])
CLUSTER_HEADER = sort_columns([
    COLUMNS.cluster_id,
    COLUMNS.cluster_size,
    COLUMNS.average_mate1_position,
    COLUMNS.average_mate2_position,
    COLUMNS.average_inserted_length,
] + [col for col in JUNCTION_HEADER if col != COLUMNS.read_name])


def cluster_junctions(
    junctions,
    clustering_method=DEFAULTS.clustering_method,
    clustering_cutoff=DEFAULTS.clustering_cutoff,
    partition_max_distance=DEFAULTS.partition_max_distance,
    max_partition_size=DEFAULTS.max_partition_size,
    subsample_seed=DEFAULTS.subsample_seed,
    concurrency_limit=DEFAULTS.concurrency_limit,
    log=LOG,
):
    """
    sort and cluster junctions with the given method

    Args:
        junctions (list of Junction): the junctions to be clustered, in any order
        clustering_method (CLUSTER_METHOD): the clustering method
        clustering_cutoff (float): the height at which dendrograms are cut (hierarchical only)
        partition_max_distance (int): maximum distance between consecutive mates of a partition (hierarchical only)
        max_partition_size (int): partitions above this size are subsampled (hierarchical only)
        subsample_seed (int): seed for subsampling, random if None (hierarchical only)
        concurrency_limit (int): number of processes used to cluster partitions (hierarchical only)

    Returns:
        list of Cluster: the clusters, sorted
    """
    junctions = sorted(junctions)
    if CLUSTER_METHOD.enforce(clustering_method) == CLUSTER_METHOD.SIMPLE:
        return simple_clustering_method(junctions)
    return hierarchical_clustering_method(
        junctions,
        clustering_cutoff,
        partition_max_distance=partition_max_distance,
        max_partition_size=max_partition_size,
        rng=random.Random(subsample_seed),
        concurrency_limit=concurrency_limit,
        log=log,
    )


def main(
    inputs,
    output,
    clustering_method=DEFAULTS.clustering_method,
    clustering_cutoff=DEFAULTS.clustering_cutoff,
    partition_max_distance=DEFAULTS.partition_max_distance,
    max_partition_size=DEFAULTS.max_partition_size,
    subsample_seed=DEFAULTS.subsample_seed,
    concurrency_limit=DEFAULTS.concurrency_limit,
    start_time=None,
    **kwargs
):
    """
    Args:
        inputs (:class:`List` of :class:`str`): list of input junction files to read
        output (str): path to the output directory
        clustering_method (CLUSTER_METHOD): the clustering method
        clustering_cutoff (float): the height at which dendrograms are cut

    Returns:
        list: the output file paths
    """
    if start_time is None:
        start_time = int(time.time())
    mkdirp(output)
    cluster_output = os.path.join(output, 'clusters.tab')
    cluster_assign_output = os.path.join(output, 'cluster_assignment.tab')

    junctions = read_inputs(inputs, log=LOG)

    LOG('computing clusters', time_stamp=True)
    clusters = cluster_junctions(
        junctions,
        clustering_method=clustering_method,
        clustering_cutoff=clustering_cutoff,
        partition_max_distance=partition_max_distance,
        max_partition_size=max_partition_size,
        subsample_seed=subsample_seed,
        concurrency_limit=concurrency_limit,
        log=LOG.indent(),
    )

    hist = {}
    cluster_rows = []
    assignment_rows = []
    for cluster in clusters:
        hist[len(cluster)] = hist.get(len(cluster), 0) + 1
        cluster_id = str(uuid())
        row = cluster.flatten()
        row[COLUMNS.cluster_id] = cluster_id
        cluster_rows.append(row)
        for junction in cluster:
            row = junction.flatten()
            row[COLUMNS.cluster_id] = cluster_id
            assignment_rows.append(row)
    LOG('computed', len(clusters), 'clusters', time_stamp=False)
    LOG('cluster input junctions distribution', sorted(hist.items()), time_stamp=False)
    if len(assignment_rows) < len(junctions):
        LOG('dropped', len(junctions) - len(assignment_rows), 'junctions from oversized partitions', time_stamp=False)

    output_tabbed_file(cluster_rows, cluster_output, header=CLUSTER_HEADER)
    output_tabbed_file(assignment_rows, cluster_assign_output, header=JUNCTION_HEADER + [COLUMNS.cluster_id])
    generate_complete_stamp(output, LOG, start_time=start_time)
    return [cluster_output, cluster_assign_output]
