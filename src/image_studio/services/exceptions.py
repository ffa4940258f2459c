"""Service error hierarchy for image generation and mirroring.

This module defines the exception hierarchy for service-level errors:
- ServiceError: Base for all service errors
- TransientError: Errors that could succeed on a later resubmission (network, rate limits)
- PermanentError: Errors that will not (authentication, validation, configuration)

Nothing in the application retries automatically; the split only drives logging.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    pass


class TransientError(ServiceError):
    """Transient error that may succeed when the user resubmits.

    Examples:
    - Network timeouts
    - Rate limit exceeded (429)
    - Service unavailable (503)
    """

    pass


class PermanentError(ServiceError):
    """Permanent error that will not succeed on resubmission.

    Examples:
    - Authentication failures (401, 403)
    - Invalid request parameters (400)
    - Configuration errors
    """

    pass


# Inference provider errors
class ProviderError(ServiceError):
    """Inference provider call or output parsing failed."""

    pass


class ProviderConfigurationError(ProviderError, PermanentError):
    """Provider credential missing."""

    pass


# Mirroring-specific errors
class MirrorError(ServiceError):
    """Base exception for image mirroring errors."""

    pass


class MirrorRateLimitError(MirrorError, TransientError):
    """Rate limit exceeded (429)."""

    pass


class MirrorNetworkError(MirrorError, TransientError):
    """Network timeout or service unavailable."""

    pass


class MirrorAuthError(MirrorError, PermanentError):
    """Authentication failure (401, 403)."""

    pass


class MirrorValidationError(MirrorError, PermanentError):
    """Bad request (400)."""

    pass
