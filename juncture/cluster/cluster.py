import itertools

from ..constants import COLUMNS


def weighted_mean(values, weights=None):
    if weights is None:
        weights = [1 for v in values]
    return sum(x * w for x, w in zip(values, weights)) / sum(weights)


class Cluster:
    """
    a group of junctions which are believed to support the same structural variant
    """

    def __init__(self, junctions):
        """
        Args:
            junctions (list of Junction): the junctions in the cluster, stored sorted

        Raises:
            AttributeError: the cluster has no junctions
        """
        if not junctions:
            raise AttributeError('cannot create a cluster without any junctions')
        self.junctions = sorted(junctions)

    def __len__(self):
        return len(self.junctions)

    def __iter__(self):
        return iter(self.junctions)

    def __getitem__(self, index):
        return self.junctions[index]

    def __eq__(self, other):
        if not hasattr(other, 'junctions'):
            return False
        return self.junctions == other.junctions

    def __lt__(self, other):
        return self.junctions < other.junctions

    def __hash__(self):
        return hash(tuple(self.junctions))

    def __repr__(self):
        return 'Cluster({}, size={})'.format(str(self.lead), len(self))

    @property
    def lead(self):
        """:class:`~juncture.junction.Junction`: the lowest junction in the cluster"""
        return self.junctions[0]

    def average_mate1_position(self):
        return int(round(weighted_mean([j.mate1.position for j in self.junctions]), 0))

    def average_mate2_position(self):
        return int(round(weighted_mean([j.mate2.position for j in self.junctions]), 0))

    def average_inserted_length(self):
        return weighted_mean([j.inserted_length for j in self.junctions])

    def flatten(self):
        """
        returns the key-value representation of the cluster as can be written directly as a tab row.
        The lead junction is used for the mate and inserted sequence columns
        """
        row = self.lead.flatten()
        del row[COLUMNS.read_name]
        row.update({
            COLUMNS.cluster_size: len(self),
            COLUMNS.average_mate1_position: self.average_mate1_position(),
            COLUMNS.average_mate2_position: self.average_mate2_position(),
            COLUMNS.average_inserted_length: self.average_inserted_length(),
        })
        return row


def simple_clustering_method(junctions):
    """
    cluster junctions which have the same signature (mates and inserted sequence)

    Args:
        junctions (list of Junction): the junctions to be clustered

    Returns:
        list of Cluster: the clusters, sorted
    """
    clusters = []
    for _, group in itertools.groupby(sorted(junctions), key=lambda junction: junction.signature):
        clusters.append(Cluster(list(group)))
    return sorted(clusters)
