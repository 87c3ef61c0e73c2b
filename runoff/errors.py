"""
Exceptions raised by ``runoff`` triangles, squares and reserving methods
when a period index or a supplied sequence does not fit the target
structure.
"""



class NegativePeriodError(IndexError):
    """
    Raised when a row, column or diagonal index is negative.
    """
    def __init__(self, message=None):
        if message is None:
            message = "Accident, development and calendar periods cannot be negative."
        super().__init__(message)



class ObservationPeriodExceededError(IndexError):
    """
    Raised when a row, column or diagonal index (or the sum of row and
    column for triangles) exceeds the last period under observation.
    """
    def __init__(self, message=None):
        if message is None:
            message = "The requested period exceeds the observation period."
        super().__init__(message)



class DimensionMismatchError(ValueError):
    """
    Raised when the number of supplied values does not match the
    dimension of the target row, column, diagonal or vector.

    Parameters
    ----------
    expected: int
        Number of values the target requires.

    given: int
        Number of values supplied.
    """
    def __init__(self, expected=None, given=None):
        self.expected = expected
        self.given = given
        message = "The number of elements does not match the target's dimension."
        if expected is not None and given is not None:
            message = "{} Expected: {}, given: {}.".format(message, expected, given)
        super().__init__(message)
