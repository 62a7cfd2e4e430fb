import os
from unittest.mock import patch

import pandas as pd
import pytest

from juncture.cluster import main as cluster_main
from juncture.constants import COLUMNS, EXIT_OK
from juncture.error import InvalidJunctionError
from juncture.main import main as juncture_main
from juncture.util import DEVNULL, read_inputs, read_junctions_from_input_file

from ..util import get_data


class TestReadJunctions:
    def test_read_file(self):
        junctions = read_junctions_from_input_file(get_data('junctions.tab'))
        assert len(junctions) == 6
        assert [j.read_name for j in junctions] == ['read1', 'read4', 'read2', 'read5', 'read3', 'read6']
        assert junctions[0].mate1.position == 1000
        assert junctions[0].inserted_sequence == 'AC'
        assert junctions[1].mate1.orientation == '-'
        assert junctions[3].mate1.seq_name == '2'
        assert junctions[3].inserted_sequence == ''
        assert junctions[5].inserted_sequence == ''

    def test_default_inserted_sequence(self):
        junctions = read_junctions_from_input_file(
            get_data('junctions.tab'),
            add_default={COLUMNS.inserted_sequence: 'N'},
        )
        assert junctions[1].inserted_sequence == 'N'

    def test_missing_required_column(self):
        with pytest.raises(InvalidJunctionError):
            read_junctions_from_input_file(get_data('missing_orientation.tab'))

    def test_empty_file(self):
        assert read_junctions_from_input_file(get_data('empty.tab')) == []

    def test_read_inputs(self):
        junctions = read_inputs([get_data('junctions.tab'), get_data('empty.tab')], log=DEVNULL)
        assert len(junctions) == 6

    def test_read_inputs_brace_expression(self):
        junctions = read_inputs([get_data('{junctions,empty}.tab')])
        assert len(junctions) == 6


class TestClusterJunctions:
    def test_hierarchical(self):
        junctions = read_junctions_from_input_file(get_data('junctions.tab'))
        clusters = cluster_main.cluster_junctions(junctions, clustering_cutoff=10, log=DEVNULL)
        assert [[j.read_name for j in c] for c in clusters] == [
            ['read1', 'read2'], ['read3'], ['read4'], ['read5', 'read6']]

    def test_hierarchical_large_cutoff(self):
        junctions = read_junctions_from_input_file(get_data('junctions.tab'))
        clusters = cluster_main.cluster_junctions(junctions, clustering_cutoff=20, log=DEVNULL)
        assert [len(c) for c in clusters] == [3, 1, 2]

    def test_simple(self):
        junctions = read_junctions_from_input_file(get_data('junctions.tab'))
        clusters = cluster_main.cluster_junctions(junctions, clustering_method='simple', log=DEVNULL)
        assert len(clusters) == 6

    def test_bad_method(self):
        with pytest.raises(KeyError):
            cluster_main.cluster_junctions([], clustering_method='kmeans')


class TestClusterMain:
    def test_output_files(self, tmp_path):
        output = str(tmp_path / 'output')
        result = cluster_main.main(
            inputs=[get_data('junctions.tab')], output=output, clustering_cutoff=10, subsample_seed=1)
        assert result == [os.path.join(output, 'clusters.tab'), os.path.join(output, 'cluster_assignment.tab')]
        assert os.path.exists(os.path.join(output, 'JUNCTURE.COMPLETE'))

        clusters = pd.read_csv(result[0], sep='\t', dtype={COLUMNS.mate1_seq_name: str})
        assert len(clusters) == 4
        assert clusters[COLUMNS.cluster_size].tolist() == [2, 1, 1, 2]
        assert clusters[COLUMNS.average_mate1_position].tolist() == [1002, 1010, 1000, 301]
        assert COLUMNS.read_name not in clusters.columns
        assert len(set(clusters[COLUMNS.cluster_id])) == 4

        assignment = pd.read_csv(result[1], sep='\t')
        assert len(assignment) == 6
        assert set(assignment[COLUMNS.cluster_id]) == set(clusters[COLUMNS.cluster_id])
        sizes = assignment.groupby(COLUMNS.cluster_id).size().to_dict()
        for cluster_id, size in zip(clusters[COLUMNS.cluster_id], clusters[COLUMNS.cluster_size]):
            assert sizes[cluster_id] == size

    def test_empty_input(self, tmp_path):
        output = str(tmp_path)
        result = cluster_main.main(inputs=[get_data('empty.tab')], output=output)
        with open(result[0]) as fh:
            assert fh.read().strip().split('\t')[0] == COLUMNS.cluster_id


class TestCommandLine:
    def test_cluster(self, tmp_path):
        output = str(tmp_path / 'output')
        args = [
            'cluster',
            '--inputs', get_data('junctions.tab'),
            '--output', output,
            '--clustering_cutoff', '10',
            '--subsample_seed', '5',
            '--concurrency_limit', '2',
        ]
        assert juncture_main(args) == EXIT_OK
        assert os.path.exists(os.path.join(output, 'clusters.tab'))
        assert os.path.exists(os.path.join(output, 'JUNCTURE.COMPLETE'))

    def test_arguments_forwarded(self, tmp_path):
        args = [
            'cluster',
            '-n', get_data('junctions.tab'),
            '-o', str(tmp_path),
            '--clustering_method', 'simple',
            '--subsample_seed', 'None',
        ]
        with patch.object(cluster_main, 'main') as mock_main:
            juncture_main(args)
        kwargs = mock_main.call_args[1]
        assert kwargs['clustering_method'] == 'simple'
        assert kwargs['subsample_seed'] is None
        assert kwargs['clustering_cutoff'] == 0.5
        assert kwargs['inputs'] == [get_data('junctions.tab')]
        assert 'log_level' not in kwargs

    def test_log_file(self, tmp_path):
        log = str(tmp_path / 'run.log')
        args = ['cluster', '-n', get_data('junctions.tab'), '-o', str(tmp_path / 'output'), '--log', log]
        juncture_main(args)
        with open(log) as fh:
            assert 'run time (s):' in fh.read()

    def test_help(self):
        with pytest.raises(SystemExit) as err:
            juncture_main(['cluster', '-h'])
        assert err.value.code == 0

    def test_missing_inputs(self, tmp_path):
        with pytest.raises(SystemExit) as err:
            juncture_main(['cluster', '-n', str(tmp_path / 'missing.tab'), '-o', str(tmp_path)])
        assert err.value.code == 2

    def test_bad_method(self, tmp_path):
        with pytest.raises(SystemExit) as err:
            juncture_main([
                'cluster', '-n', get_data('junctions.tab'), '-o', str(tmp_path), '--clustering_method', 'kmeans'
            ])
        assert err.value.code == 2
