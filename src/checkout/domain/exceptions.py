"""Domain-level exceptions.

Rule violations are expressed as subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
Backend rejections and transport failures are *not* exceptions at this
level: they come back as ``Failure`` results.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidBuyerInfoError(ValidationError):
    """The buyer form has one or more field errors."""

    def __init__(self, errors: dict[str, str]) -> None:
        fields = ", ".join(sorted(errors))
        super().__init__(f"Please correct the highlighted fields: {fields}")
        self.errors = dict(errors)


class EmptyOrderError(ValidationError):
    """There are no line items to submit."""


class SubmissionStateError(DomainException):
    """The checkout is not in a state that allows submitting."""


class SubmissionInProgressError(SubmissionStateError):
    """A submission is already in flight."""


class SubmissionClosedError(SubmissionStateError):
    """The checkout already ended (confirmed or redirected to payment)."""


class GatewayTransportError(Exception):
    """The order backend could not be reached or replied with garbage."""
