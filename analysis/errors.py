"""
Error taxonomy surfaced to callers of the dataset service.
Each error carries the HTTP-style status class it maps to.
"""


class AnalysisError(Exception):
    """Base class for user-facing analysis failures."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'error': self.message, 'status': self.status_code}


class DatasetNotFound(AnalysisError):
    """Requested dataset id is unknown to the registry."""
    status_code = 404

    def __init__(self, dataset_id: str):
        super().__init__("Dataset not found")
        self.dataset_id = dataset_id


class MissingParameter(AnalysisError):
    """A required parameter name was not supplied."""
    pass


class UnknownParameter(AnalysisError):
    """Parameter is not declared by the dataset."""
    pass


class NoDataInRange(AnalysisError):
    """Filtering left zero valid values."""

    def __init__(self, message: str = "No data in range"):
        super().__init__(message)


class InvalidPayload(AnalysisError):
    """Dataset registration body is malformed."""
    pass


class InvalidDateRange(AnalysisError):
    """A from/to bound could not be parsed."""
    pass


class InvalidWindow(AnalysisError):
    """Moving average window is not a positive integer."""
    pass
