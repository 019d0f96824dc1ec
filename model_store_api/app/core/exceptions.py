"""
Exceptions raised by the model store.
"""


class ModelStoreError(Exception):
    """Base class for model store errors."""
    pass


class InitFailure(ModelStoreError):
    """The underlying storage could not be opened or its schema created."""
    pass


class WriteFailure(ModelStoreError):
    """An insert or delete against the store did not complete.

    Raised internally by the SQLite store and caught by its public
    ``add``/``delete`` methods, which log it and report failure through
    their return value instead.
    """

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
