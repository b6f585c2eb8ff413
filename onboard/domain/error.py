"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a caller lacks the role an operation requires."""

    def __init__(self, action: str, role: str):
        self.action = action
        self.role = role
        super().__init__(f"Only {role} users can {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write would duplicate existing state."""

    pass


class PendingInvitationExistsError(ConflictError):
    """A live pending invitation already targets this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("An invitation has already been sent to this email")


class UserAlreadyExistsError(ConflictError):
    """A user already exists for this email or identity."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class TokenCollisionError(DomainError):
    """A freshly generated invitation token is already in use.

    Not retried: with 256 bits of entropy this indicates a broken random source.
    """

    def __init__(self) -> None:
        super().__init__("Generated invitation token already exists")


class InvalidInvitationError(DomainError):
    """Token unknown or invitation no longer pending.

    Deliberately does not say which, so valid tokens cannot be discovered
    by guessing.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or expired invitation")


class InvitationExpiredError(DomainError):
    """Invitation exists but its deadline has passed."""

    def __init__(self) -> None:
        super().__init__("Invitation has expired")


class InvitationEmailMismatchError(DomainError):
    """Accepting identity's email differs from the invited email."""

    def __init__(self) -> None:
        super().__init__("This invitation was issued to a different email address")
