"""Conversion options and their validation."""

from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from readmedoc.core.errors import ConfigurationError


class Options(BaseModel):
    """Options recognized by `convert`. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    out: Optional[Union[str, Path]] = Field(default=None, description="Output file path")
    tests: Optional[str] = Field(default=None, description="Tests URL")
    benchmarks: Optional[str] = Field(default=None, description="Benchmarks URL")
    source: Optional[str] = Field(default=None, description="Source URL")
    fragment: bool = Field(default=False, description="Output an HTML fragment")
    title: str = Field(default="README", description="HTML title")
    head: Optional[str] = Field(default=None, description="Content to insert into HTML head")
    prepend: Optional[str] = Field(default=None, description="Content to prepend to HTML body")
    append: Optional[str] = Field(default=None, description="Content to append to HTML body")


def validate(options=None):
    """
    Validates caller options and merges them over the defaults.

    Args:
        options (Mapping or Options, optional): caller supplied options.

    Returns:
        Options: validated, immutable options.

    Raises:
        ConfigurationError: if `options` is not a mapping, contains an unknown
            key, or a value has the wrong type.
    """
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"invalid argument. Options argument must be an object. Value: `{options!r}`."
        )
    try:
        return Options.model_validate(dict(options))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"invalid option. {problems}.") from e
