

class InvalidJunctionError(Exception):
    """
    raised when a junction record cannot be built from the given input

    for example if an orientation is not one of the STRAND values or a
    required column is missing from an input table
    """
    pass
