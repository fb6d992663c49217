"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordNotFoundError(DomainException):
    """Requested record does not exist in its registry"""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidRecordError(DomainException):
    """Change would violate a record invariant"""

    pass


class InsightServiceError(DomainException):
    """Language model API returned an error or is unavailable"""

    pass


class InsightNotConfiguredError(InsightServiceError):
    """No API key configured for the insight service"""

    pass


class InvalidInsightResponseError(DomainException):
    """Language model reply does not match the expected schema"""

    pass
