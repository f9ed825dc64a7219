class TSPEvoError(Exception):
    """Base class for errors raised by tsp_evo."""


class ConfigurationError(TSPEvoError, ValueError):
    """Invalid simulation setup, rejected before the first generation runs."""


class InvariantViolation(TSPEvoError, AssertionError):
    """A population or tour invariant broke; indicates a bug in an operator."""

    def __init__(self, message: str, generation: int = None, **context):
        self.generation = generation
        self.context = context
        details = ", ".join(f"{k}={v}" for k, v in sorted(context.items()))
        if generation is not None:
            message = f"generation {generation}: {message}"
        if details:
            message = f"{message} ({details})"
        super().__init__(message)
