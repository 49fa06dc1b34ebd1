"""Stashify exception hierarchy.

Shared by the route registry, the routers and the session resolver so every
module raises and catches the same types.
"""


class StashifyError(Exception):
    """Base for all Stashify-specific errors."""


class RegistryError(StashifyError):
    """Raised when the route table is built incorrectly.

    Duplicate route names are caught at startup, never at navigation time.
    """


class ContractViolation(StashifyError):
    """A navigation request does not satisfy its target route.

    Either the route name is unregistered, or the params fail the route's
    param shape. The request is rejected and no router state changes.
    """

    def __init__(self, route_name: str, reason: str) -> None:
        self.route_name = route_name
        self.reason = reason
        super().__init__(f"{route_name}: {reason}")


class SessionResolutionFailure(StashifyError):
    """The session resolver reported an error instead of a session."""

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Session could not be resolved{detail}")
