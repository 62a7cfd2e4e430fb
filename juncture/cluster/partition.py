from .constants import PARTITION_MAX_DISTANCE


def _mates_compatible(mate, other, max_distance):
    return (
        mate.seq_name == other.seq_name
        and mate.orientation == other.orientation
        and abs(mate.position - other.position) <= max_distance
    )


def _split_on_mate(junctions, mate_attr, max_distance):
    """
    streaming split of junctions where a new group starts whenever the given mate
    is not compatible with the same mate of the previous junction
    """
    groups = []
    current = []
    for junction in junctions:
        if current and not _mates_compatible(
            getattr(junction, mate_attr), getattr(current[-1], mate_attr), max_distance
        ):
            groups.append(current)
            current = []
        current.append(junction)
    if current:
        groups.append(current)
    return groups


def split_partition_on_mate2(partition, max_distance=PARTITION_MAX_DISTANCE):
    """
    split a partition of junctions which share mate1 further by their second mate

    Args:
        partition (list of Junction): junctions sorted by their second mate
        max_distance (int): maximum distance between the mate2 positions of consecutive junctions

    Returns:
        list of list of Junction: the sub-partitions, each sorted
    """
    return [sorted(group) for group in _split_on_mate(partition, 'mate2', max_distance)]


def partition_junctions(junctions, max_distance=PARTITION_MAX_DISTANCE):
    """
    Split junctions into partitions of junctions with similar mates. The input is walked in its given
    order and a new partition is started when mate1 of a junction is on a different sequence, has a
    different orientation, or is further than max_distance from mate1 of the previously added junction.
    Each partition is then sorted by mate2 and split the same way using mate2.

    Note:
        the distance is checked against the previous junction only so that partitions are chains. Junctions
        at 0, 40 and 80 are placed in the same partition. The input is expected to be sorted by mate1

    Args:
        junctions (list of Junction): the junctions to partition
        max_distance (int): maximum distance between the positions of consecutive junction mates

    Returns:
        list of list of Junction: the partitions, each sorted
    """
    partitions = []
    for group in _split_on_mate(junctions, 'mate1', max_distance):
        group = sorted(group, key=lambda junction: junction.mate2)
        partitions.extend(split_partition_on_mate2(group, max_distance=max_distance))
    return partitions
