"""Typed exceptions raised by the CRT reconstruction algorithms.

Each of these indicates corrupt upstream data or a usage error. They are
never recovered from inside the package.
"""


class CRTError(Exception):
    """Base exception for all CRT reconstruction errors."""


class GeometryError(CRTError):
    """Raised when a channel or a strip cannot be found in the geometry."""


class AssociationError(CRTError):
    """Raised when a record does not have the expected number of associated
    records (e.g. a strip hit which is not tied to exactly one FEB record).
    """

    def __init__(self, kind, key, count, expected=1):
        """Initialize with the offending association.

        Parameters
        ----------
        kind : str
            Name of the association (e.g. 'strip hit -> FEB data')
        key : int
            Key of the record on the source side of the association
        count : int
            Number of associated records found
        expected : int, default 1
            Number of associated records expected
        """
        self.kind = kind
        self.key = key
        self.count = count
        super().__init__(
            f"Expected {expected} record(s) in the `{kind}` association for "
            f"key {key}, found {count}."
        )


class StaleContextError(CRTError):
    """Raised when a truth matching query is issued before the truth
    information of the current event has been set up.
    """
