class FlameConvError(Exception):
    """Base class for every error raised by flameconv."""


class FormatMismatch(FlameConvError):
    """The input is not in any format we know how to convert."""


class MalformedLine(FlameConvError):
    """A line does not look like `frame[;frame]* <count>`."""

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"unexpected line format{where}: {line!r}")


class SchemaInvariantViolation(FlameConvError):
    """The generated tables are not structurally sound."""


class InputError(FlameConvError):
    """The requested input could not be read."""
