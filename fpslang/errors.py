from fpslang.types import ErrorVal


class FpsError(Exception):
    """Exception type used to propagate FPS runtime and allocation errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"FpsError: {err.name}: {err.message}")
        self.err = err


class ParseError(Exception):
    """Raised when source text does not match the FPS grammar."""


class InvariantViolation(Exception):
    """A statement reached the frame evaluator that the allocator should have resolved.

    Not an FpsError: it marks a bug in the interpreter, not in the program.
    """
