"""Collate per-sample Picard metrics reports into unified tables.
"""


class CollationError(Exception):
    """Structural problem preventing a correct master metrics table.
    """
    pass
