from flameconv.flame_graph import (FlameGraphConverter, ParsedLine,
                                   convert_flame_graph_profile, detect_format,
                                   is_flame_graph_format, parse_line)
from flameconv.errors import (FlameConvError, FormatMismatch, InputError,
                              MalformedLine, SchemaInvariantViolation)

__all__ = [
    'FlameGraphConverter',
    'ParsedLine',
    'convert_flame_graph_profile',
    'detect_format',
    'is_flame_graph_format',
    'parse_line',
    'FlameConvError',
    'FormatMismatch',
    'InputError',
    'MalformedLine',
    'SchemaInvariantViolation',
]
