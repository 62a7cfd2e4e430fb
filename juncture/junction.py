from collections import namedtuple

from .constants import COLUMNS, STRAND, flip_strand, reverse_complement
from .error import InvalidJunctionError


class Mate(namedtuple('Mate', ['seq_name', 'orientation', 'position'])):
    """
    one end of a junction, the reference position where a split read segment is aligned

    Mates are ordered by sequence name, then orientation, then position so that sorted junctions
    keep mates with the same orientation together
    """
    __slots__ = ()

    def __new__(cls, seq_name, orientation, position):
        """
        Args:
            seq_name (str): the reference/chromosome name
            orientation (STRAND): the strand the read segment was aligned to
            position (int): the genomic position of the mate

        Examples:
            >>> Mate('1', '+', 100)
            >>> Mate('chrX', STRAND.REVERSE, 2000)
        """
        try:
            orientation = STRAND.enforce(orientation)
        except KeyError:
            raise InvalidJunctionError('invalid mate orientation', orientation)
        try:
            position = int(position)
        except (TypeError, ValueError):
            raise InvalidJunctionError('mate position must be an integer', position)
        return super(Mate, cls).__new__(cls, str(seq_name), orientation, position)

    @property
    def key(self):
        """:class:`tuple`: the sequence name and position, flipping the orientation does not change it"""
        return (self.seq_name, self.position)

    def flip(self):
        return Mate(self.seq_name, flip_strand(self.orientation), self.position)

    def __str__(self):
        return '{}:{}{}'.format(self.seq_name, self.position, self.orientation)


class Junction(namedtuple('Junction', ['mate1', 'mate2', 'inserted_sequence', 'read_name'])):
    """
    a candidate breakpoint between two mates, inferred from a split read alignment

    Junctions are ordered by mate1, then mate2, then the inserted sequence. The read name
    only breaks ties between junctions with the same signature
    """
    __slots__ = ()

    def __new__(cls, mate1, mate2, inserted_sequence='', read_name=''):
        """
        Args:
            mate1 (Mate): the first mate
            mate2 (Mate): the second mate
            inserted_sequence (str): sequence between the mates which is not part of either
            read_name (str): name of the read supporting the junction

        Note:
            the mates are stored so that the sequence name and position of mate1 are never greater than
            those of mate2. Swapping the mates reads the event from the opposite strand so the orientations
            are flipped and the inserted sequence is reverse complemented. The swap does not change the
            position key so building a junction from an existing one returns an equal junction

        Example:
            >>> Junction(Mate('1', '+', 100), Mate('1', '-', 500), 'AC')
        """
        inserted_sequence = '' if inserted_sequence is None else str(inserted_sequence)
        read_name = '' if read_name is None else str(read_name)
        if mate2.key < mate1.key:
            mate1, mate2 = mate2.flip(), mate1.flip()
            inserted_sequence = reverse_complement(inserted_sequence)
        return super(Junction, cls).__new__(cls, mate1, mate2, inserted_sequence, read_name)

    @property
    def signature(self):
        """:class:`tuple`: the mates and the inserted sequence, the read name is excluded"""
        return (self.mate1, self.mate2, self.inserted_sequence)

    @property
    def inserted_length(self):
        return len(self.inserted_sequence)

    def __str__(self):
        return 'Junction({} -> {}{})'.format(
            str(self.mate1),
            str(self.mate2),
            ', seq=' + repr(self.inserted_sequence) if self.inserted_sequence else ''
        )

    def flatten(self):
        """
        returns the key-value representation of the junction as can be written directly as a tab row
        """
        return {
            COLUMNS.mate1_seq_name: self.mate1.seq_name,
            COLUMNS.mate1_position: self.mate1.position,
            COLUMNS.mate1_orientation: self.mate1.orientation,
            COLUMNS.mate2_seq_name: self.mate2.seq_name,
            COLUMNS.mate2_position: self.mate2.position,
            COLUMNS.mate2_orientation: self.mate2.orientation,
            COLUMNS.inserted_sequence: self.inserted_sequence,
            COLUMNS.read_name: self.read_name,
        }
