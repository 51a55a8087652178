class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedInputError(ValidationError):
    """Raised when a bulk import payload is not valid JSON or not an array."""


class NoTargetIdentifierError(ValidationError):
    """Raised when a batch run is requested without an attendance identifier."""


class SubmissionError(DomainError):
    """Base for failures of a single attendance submission."""


class TransportError(SubmissionError):
    """Raised when the request never got a response."""


class RemoteRejectionError(SubmissionError):
    """Raised when the ERP answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = int(status_code)
        self.body = body or ""
        detail = f"HTTP {self.status_code}"
        if self.body:
            detail = f"{detail}: {self.body}"
        super().__init__(detail)
