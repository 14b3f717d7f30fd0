"""Error types for the UniFit core.

Collaborator failures are recovered where they happen and never reach the
caller. Invalid state transitions are programming errors and propagate.
"""


class UniFitError(Exception):
    """Base exception for UniFit errors."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        self.message = message or code
        super().__init__(self.message)


class AdvisorError(UniFitError):
    """Raised when an advisor call fails or times out.

    Attributes:
        advisor: Advisor name that failed
        original_error: Original exception that caused the failure
    """

    def __init__(self, advisor: str, original_error: Exception) -> None:
        self.advisor = advisor
        self.original_error = original_error
        super().__init__("advisor_failed", f"Advisor '{advisor}' failed: {original_error}")


class InvalidTransitionError(UniFitError):
    """Raised when a session operation is not allowed in the current state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__("invalid_transition", f"Cannot {operation} while session is {state}")


class OnboardingIncompleteError(UniFitError):
    """Raised when a plan is accepted before onboarding produced one."""

    def __init__(self, message: str = "No analysed plan to accept; complete onboarding first"):
        super().__init__("onboarding_incomplete", message)
