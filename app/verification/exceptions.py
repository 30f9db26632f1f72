class VerificationError(Exception):
    """Base error for the report verification pipeline."""


class VerificationUnavailableError(VerificationError):
    """The model is not configured, the call failed, or it returned no text."""


class VerificationInputError(VerificationError):
    """No description was supplied to verify."""
