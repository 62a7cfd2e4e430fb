import os

from juncture.junction import Junction, Mate

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


def junction(
    mate1_position, mate2_position, inserted_sequence='', read_name='', seq1='1', orient1='+', seq2='1', orient2='+'
):
    return Junction(
        Mate(seq1, orient1, mate1_position),
        Mate(seq2, orient2, mate2_position),
        inserted_sequence=inserted_sequence,
        read_name=read_name,
    )
