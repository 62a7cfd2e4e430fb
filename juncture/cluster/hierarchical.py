from concurrent import futures
import logging
import random

import numpy as np
from scipy.cluster.hierarchy import fcluster, linkage

from ..util import LOG
from .cluster import Cluster
from .constants import MAX_PARTITION_SIZE, PARTITION_MAX_DISTANCE
from .partition import partition_junctions


INFINITE = int(np.iinfo(np.int32).max)
""":class:`int`: distance between junctions which cannot support the same breakpoint"""


def junction_distance(junction, other):
    """
    distance between two junctions. This is the sum of the distances between their first mates, their second mates
    and the difference in the length of their inserted sequences

    Example:
        >>> a = Junction(Mate('1', '+', 100), Mate('1', '+', 500), 'AA')
        >>> b = Junction(Mate('1', '+', 101), Mate('1', '+', 502), 'AAAAA')
        >>> junction_distance(a, b)
        6

    Returns:
        int: the distance or INFINITE if the mates are on different sequences or have different orientations
    """
    for mate, other_mate in [(junction.mate1, other.mate1), (junction.mate2, other.mate2)]:
        if mate.seq_name != other_mate.seq_name or mate.orientation != other_mate.orientation:
            return INFINITE
    return (
        abs(junction.mate1.position - other.mate1.position)
        + abs(junction.mate2.position - other.mate2.position)
        + abs(junction.inserted_length - other.inserted_length)
    )


def subsample_partition(partition, sample_size, rng=None):
    """
    uniform random sample without replacement of the junctions in a partition

    Args:
        partition (list of Junction): the partition to sample from
        sample_size (int): the number of junctions to select
        rng (random.Random): source of randomness. Pass a seeded generator for a reproducible sample

    Returns:
        list of Junction: the sampled junctions
    """
    assert len(partition) >= sample_size, 'cannot sample {} junctions from a partition of {}'.format(
        sample_size, len(partition))
    if rng is None:
        rng = random.Random()
    return rng.sample(list(partition), sample_size)


def condensed_distance_matrix(partition):
    """
    the upper triangle of the matrix of distances between all pairs of junctions in the partition

    Returns:
        numpy.ndarray: distances for the pairs (i, j) with i < j in row-major order
    """
    size = len(partition)
    distances = np.empty((size * (size - 1)) // 2, dtype=np.float64)
    k = 0
    for i in range(0, size - 1):
        for j in range(i + 1, size):
            distances[k] = junction_distance(partition[i], partition[j])
            k += 1
    return distances


def average_linkage(distances):
    """
    agglomerative clustering of a condensed distance matrix merging the clusters with the lowest average distance

    Returns:
        numpy.ndarray: the linkage matrix. Row s merges the nodes in columns 0 and 1 into node n + s at the
        height given in column 2
    """
    return linkage(distances, method='average')


def cut_tree_by_height(linkage_matrix, cutoff):
    """
    assign flat cluster labels to the leaves of a dendrogram. Merges are applied in order until the first
    merge with a height at or above the cutoff

    Args:
        linkage_matrix (numpy.ndarray): the linkage matrix for n leaves
        cutoff (float): the minimum height of a merge which is not applied

    Returns:
        numpy.ndarray: the label of each leaf. Labels are numbered by the first leaf in each cluster
    """
    # fcluster keeps merges at or below its threshold, the cutoff itself is excluded
    threshold = np.nextafter(float(cutoff), -np.inf)
    flat_labels = fcluster(linkage_matrix, threshold, criterion='distance')

    labels = np.empty(len(flat_labels), dtype=np.int64)
    first_seen = {}
    for leaf, label in enumerate(flat_labels):
        labels[leaf] = first_seen.setdefault(label, len(first_seen))
    return labels


def cluster_partition(partition, clustering_cutoff):
    """
    hierarchically cluster the junctions of a single partition

    Returns:
        list of Cluster: the clusters, in order of the first junction of each cluster in the partition
    """
    if len(partition) < 2:
        return [Cluster(partition)]
    linkage_matrix = average_linkage(condensed_distance_matrix(partition))
    labels = cut_tree_by_height(linkage_matrix, clustering_cutoff)

    junctions_by_label = {}
    for label, junction in zip(labels, partition):
        junctions_by_label.setdefault(label, []).append(junction)
    return [Cluster(junctions) for junctions in junctions_by_label.values()]


def hierarchical_clustering_method(
    junctions,
    clustering_cutoff,
    partition_max_distance=PARTITION_MAX_DISTANCE,
    max_partition_size=MAX_PARTITION_SIZE,
    rng=None,
    concurrency_limit=1,
    log=LOG,
):
    """
    partition the junctions and hierarchically cluster each partition

    Partitions larger than max_partition_size are randomly subsampled to max_partition_size junctions. The
    junctions left out of the sample are not assigned to any cluster

    Args:
        junctions (list of Junction): the junctions to cluster, sorted by mate1
        clustering_cutoff (float): the height at which the dendrogram of each partition is cut
        partition_max_distance (int): maximum distance between consecutive mates of a partition
        max_partition_size (int): the largest partition which is clustered without subsampling
        rng (random.Random): source of randomness for subsampling
        concurrency_limit (int): the number of processes used to cluster the partitions
        log (Log): the logging function

    Returns:
        list of Cluster: the clusters, sorted
    """
    if rng is None:
        rng = random.Random()
    partitions = partition_junctions(junctions, max_distance=partition_max_distance)
    log('clustering', len(junctions), 'junctions in', len(partitions), 'partitions')

    clusters = []
    to_cluster = []
    for partition in partitions:
        if len(partition) < 2:
            clusters.append(Cluster(partition))
            continue
        if len(partition) > max_partition_size:
            log(
                'A partition exceeds the maximum size ({}>{}) and has to be subsampled. '
                'Representative partition member: [{}] -> [{}]'.format(
                    len(partition), max_partition_size, partition[0].mate1, partition[0].mate2),
                level=logging.WARNING,
            )
            partition = subsample_partition(partition, max_partition_size, rng=rng)
        to_cluster.append(partition)

    if concurrency_limit > 1 and len(to_cluster) > 1:
        with futures.ProcessPoolExecutor(max_workers=concurrency_limit) as pool:
            submitted = [pool.submit(cluster_partition, partition, clustering_cutoff) for partition in to_cluster]
            try:
                for response in submitted:
                    clusters.extend(response.result())
            except Exception:
                pool.shutdown(wait=True, cancel_futures=True)
                raise
    else:
        for partition in to_cluster:
            clusters.extend(cluster_partition(partition, clustering_cutoff))
    log('computed', len(clusters), 'clusters')
    return sorted(clusters)
