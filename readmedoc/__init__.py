"""Convert package READMEs to HTML, rendering equation blocks as images."""

from readmedoc.core.convert import Completion, ConversionResult, convert, convert_async
from readmedoc.core.errors import (
    ConfigurationError,
    EquationError,
    MalformedBlockError,
    MalformedMarkerError,
    ReadmeDocError,
)
from readmedoc.core.options import Options
from readmedoc.core.renderer import render_baseline

__version__ = "0.1.0"

__all__ = [
    "Completion",
    "ConfigurationError",
    "ConversionResult",
    "EquationError",
    "MalformedBlockError",
    "MalformedMarkerError",
    "Options",
    "ReadmeDocError",
    "convert",
    "convert_async",
    "render_baseline",
]
