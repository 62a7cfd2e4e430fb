from juncture.cluster.partition import partition_junctions, split_partition_on_mate2

from ..util import junction


class TestPartitionJunctions:
    def test_empty(self):
        assert partition_junctions([]) == []

    def test_single_junction(self):
        j = junction(100, 5000)
        assert partition_junctions([j]) == [[j]]

    def test_chained_positions_share_partition(self):
        # 0 and 80 are more than 50bp apart but each is within 50bp of the previous junction
        junctions = [junction(0, 5000), junction(40, 5000), junction(80, 5000)]
        partitions = partition_junctions(junctions)
        assert partitions == [junctions]

    def test_split_on_mate1_distance(self):
        junctions = [junction(0, 5000), junction(50, 5000), junction(101, 5000)]
        partitions = partition_junctions(junctions)
        assert partitions == [junctions[:2], junctions[2:]]

    def test_split_on_mate1_orientation(self):
        junctions = [junction(0, 5000), junction(0, 5000, orient1='-')]
        assert len(partition_junctions(junctions)) == 2

    def test_split_on_mate1_seq_name(self):
        junctions = [junction(0, 5000), junction(0, 5000, seq1='2', seq2='2')]
        assert len(partition_junctions(junctions)) == 2

    def test_input_order_is_not_sorted_by_mate1(self):
        junctions = [junction(0, 5000), junction(500, 5000), junction(10, 5000)]
        partitions = partition_junctions(junctions)
        assert partitions == [[junctions[0]], [junctions[1]], [junctions[2]]]

    def test_split_on_mate2(self):
        junctions = [junction(100, 5000), junction(100, 1000), junction(110, 5030)]
        partitions = partition_junctions(junctions)
        assert partitions == [[junctions[1]], [junctions[0], junctions[2]]]

    def test_split_on_mate2_orientation(self):
        junctions = [junction(100, 5000), junction(100, 5000, orient2='-')]
        assert len(partition_junctions(junctions)) == 2

    def test_partitions_are_sorted(self):
        junctions = [junction(130, 5000, 'A'), junction(100, 5010), junction(120, 5000)]
        partitions = partition_junctions(junctions)
        assert partitions == [sorted(junctions)]

    def test_max_distance(self):
        junctions = [junction(0, 5000), junction(20, 5000)]
        assert len(partition_junctions(junctions, max_distance=10)) == 2
        assert len(partition_junctions(junctions, max_distance=20)) == 1

    def test_coverage_and_cohesion(self):
        junctions = sorted([
            junction(100, 5000),
            junction(120, 5040, 'AT'),
            junction(160, 5090),
            junction(161, 9000),
            junction(400, 5000),
            junction(100, 5000, orient1='-'),
            junction(100, 5000, seq2='2'),
            junction(110, 5000, seq2='2', orient2='-'),
            junction(900, 100, seq1='2', seq2='3'),
        ])
        partitions = partition_junctions(junctions)
        assert sorted([j for p in partitions for j in p]) == junctions
        for partition in partitions:
            for prev, curr in zip(partition, partition[1:]):
                assert prev.mate1.seq_name == curr.mate1.seq_name
                assert prev.mate1.orientation == curr.mate1.orientation
                assert prev.mate2.seq_name == curr.mate2.seq_name
                assert prev.mate2.orientation == curr.mate2.orientation
                assert abs(prev.mate2.position - curr.mate2.position) <= 50


class TestSplitPartitionOnMate2:
    def test_empty(self):
        assert split_partition_on_mate2([]) == []

    def test_chain(self):
        junctions = [junction(0, 100), junction(0, 140), junction(0, 180), junction(0, 231)]
        assert split_partition_on_mate2(junctions) == [junctions[:3], junctions[3:]]

    def test_sub_partitions_sorted(self):
        junctions = [junction(120, 1000), junction(100, 1010)]
        assert split_partition_on_mate2(junctions) == [[junctions[1], junctions[0]]]
