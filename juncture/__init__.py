"""
clusters junctions from split read alignments into groups supporting the same structural variant
"""
__version__ = '1.0.0'
