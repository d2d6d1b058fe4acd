"""Custom exception classes for Hayat Ai generation calls."""


class HayatAIError(Exception):
    """Base exception for Hayat Ai errors."""
    pass


class RequestValidationError(HayatAIError):
    """Request rejected before it reaches the backend (e.g. empty prompt)."""
    pass


class StartupConfigError(HayatAIError):
    """Required configuration (the API credential) is missing or invalid."""
    pass


class BackendCallError(HayatAIError):
    """A call to the generative backend failed."""
    pass


class AuthenticationError(BackendCallError):
    """Invalid API key or authentication failed."""
    pass


class QuotaExceededError(BackendCallError):
    """API quota exceeded."""
    pass


class NetworkError(BackendCallError):
    """Network connection error."""
    pass


class PollingTimeoutError(BackendCallError):
    """Video operation did not finish within the configured maximum wait."""
    pass


class MissingArtifactError(HayatAIError):
    """Operation completed but produced no retrievable result."""
    pass


class ImageProcessingError(HayatAIError):
    """Generated image could not be decoded or watermarked."""
    pass
