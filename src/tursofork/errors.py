"""Domain errors for tursofork."""


class ForkError(RuntimeError):
    """Raised when the fork workflow cannot continue safely."""
