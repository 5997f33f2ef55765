"""
Exceptions raised by attractors and their file formats
"""


class AttractorError(Exception):
    """base class for every error raised by this package"""


class InvalidArity(AttractorError, ValueError):
    """parameter sequence length does not match the attractor's arity"""

    def __init__(self, name: str, expected: int, got: int):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"{name} attractors require {expected} parameters but {got} were given"
        )


class IOFailure(AttractorError):
    """a file could not be created, written or read"""

    def __init__(self, path, cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"failed to access '{self.path}': {cause}")


class OrbitFormatError(AttractorError, ValueError):
    """an orbit file does not follow the expected layout"""

    def __init__(self, path, line_no: int, message: str):
        self.path = str(path)
        self.line_no = line_no
        super().__init__(f"{self.path}:{line_no}: {message}")
