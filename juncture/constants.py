"""
module responsible for small utility functions and constants used throughout the juncture package
"""
import argparse

from Bio.Seq import reverse_complement as _reverse_complement


PROGNAME = 'juncture'
EXIT_OK = 0


class JunctureNamespace:
    """
    a fixed set of named values. Used for the controlled vocabularies of the package and, through
    :class:`~juncture.util.WeakJunctureNamespace`, for option defaults

    Example:
        >>> nspace = JunctureNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace['otherthing']
        2
    """

    def __init__(self, **kwargs):
        object.__setattr__(self, '_members', dict(kwargs))
        object.__setattr__(self, '_types', {attr: type(value) for attr, value in kwargs.items()})
        object.__setattr__(self, '_defns', {})

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(['{}={}'.format(k, repr(v)) for k, v in sorted(self.items())]))

    def __getitem__(self, attr):
        return self._members[attr]

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        try:
            return self[attr]
        except KeyError:
            raise AttributeError('{} has no member {}'.format(self.__class__.__name__, repr(attr)))

    def __setattr__(self, attr, value):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = value

    def __contains__(self, attr):
        return attr in self._members

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def to_dict(self):
        return dict(self.items())

    def get(self, attr, default=None):
        try:
            return self[attr]
        except KeyError:
            return default

    def discard(self, attr):
        """
        Remove a member if it exists
        """
        self._members.pop(attr, None)
        self._types.pop(attr, None)
        self._defns.pop(attr, None)

    def add(self, attr, value, defn=None, cast_type=None):
        """
        Add a member to the namespace

        Args:
            attr (str): name of the member
            value: the value of the member
            defn (str): the definition, used in generating help menus
            cast_type (callable): casts a string to the type of the member. Defaults to the type of the value

        Example:
            >>> nspace = JunctureNamespace()
            >>> nspace.add('thing', 1, defn='I am a thing')
        """
        self._members[attr] = value
        self._types[attr] = type(value) if cast_type is None else cast_type
        if defn:
            self._defns[attr] = defn

    def type(self, attr):
        """
        Raises:
            KeyError: the member does not exist
        """
        return self._types[attr]

    def define(self, attr):
        """
        Raises:
            KeyError: the member does not exist or has no definition
        """
        return self._defns[attr]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> STRAND.enforce('+')
            '+'
        """
        if value not in self.values():
            raise KeyError('value {} is not a valid member'.format(repr(value)), self.values())
        return value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


def reverse_complement(s):
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s (str): the input DNA sequence

    Returns:
        str: the reverse complement of the input sequence

    Example:
        >>> reverse_complement('ATCGGT')
        'ACCGAT'
    """
    if not s:
        return s
    return _reverse_complement(s)


def positive_integer(num):
    """
    cast input to a positive integer

    Raises:
        argparse.ArgumentTypeError: if the input cannot be cast to an integer or is less than 1
    """
    try:
        num = int(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a positive integer')
    if num < 1:
        raise argparse.ArgumentTypeError('Must be a positive integer')
    return num


COMPLETE_STAMP = 'JUNCTURE.COMPLETE'
""":class:`str`: Filename of the stamp written when a run completes"""

SUBCOMMAND = JunctureNamespace(CLUSTER='cluster')
""":class:`JunctureNamespace`: holds controlled vocabulary for allowed pipeline stage values

- ``CLUSTER``: cluster junctions read from junction tables
"""

STRAND = JunctureNamespace(FORWARD='+', REVERSE='-')
""":class:`JunctureNamespace`: holds controlled vocabulary for allowed mate orientation values

- ``FORWARD``: the mate is aligned to the positive/forward strand
- ``REVERSE``: the mate is aligned to the negative/reverse strand
"""


def flip_strand(strand):
    """
    Example:
        >>> flip_strand(STRAND.FORWARD)
        '-'
    """
    if STRAND.enforce(strand) == STRAND.FORWARD:
        return STRAND.REVERSE
    return STRAND.FORWARD


CLUSTER_METHOD = JunctureNamespace(HIERARCHICAL='hierarchical', SIMPLE='simple')
""":class:`JunctureNamespace`: holds controlled vocabulary for the junction clustering methods

- ``HIERARCHICAL``: average linkage clustering of partitions cut at the clustering cutoff
- ``SIMPLE``: group junctions with identical mates and inserted sequence
"""

COLUMNS = JunctureNamespace(
    cluster_id='cluster_id',
    cluster_size='cluster_size',
    mate1_seq_name='mate1_seq_name',
    mate1_position='mate1_position',
    mate1_orientation='mate1_orientation',
    mate2_seq_name='mate2_seq_name',
    mate2_position='mate2_position',
    mate2_orientation='mate2_orientation',
    inserted_sequence='inserted_sequence',
    read_name='read_name',
    average_mate1_position='average_mate1_position',
    average_mate2_position='average_mate2_position',
    average_inserted_length='average_inserted_length',
)
""":class:`JunctureNamespace`: Column names for i/o files used throughout the pipeline

see :ref:`column descriptions <junction-column-names>`
"""

REQUIRED_COLUMNS = {
    COLUMNS.mate1_seq_name,
    COLUMNS.mate1_position,
    COLUMNS.mate1_orientation,
    COLUMNS.mate2_seq_name,
    COLUMNS.mate2_position,
    COLUMNS.mate2_orientation,
}

INTEGER_COLUMNS = {
    COLUMNS.mate1_position,
    COLUMNS.mate2_position,
    COLUMNS.cluster_size,
}


def sort_columns(input_columns):
    order = {}
    for i, col in enumerate(COLUMNS.values()):
        order[col] = i
    temp = sorted([c for c in input_columns if c in order], key=lambda x: order[x])
    temp = temp + sorted([c for c in input_columns if c not in order])
    return temp
