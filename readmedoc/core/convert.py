import asyncio
import logging
import os
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Optional

from readmedoc.core.errors import ConfigurationError
from readmedoc.core.options import validate
from readmedoc.core.renderer import render_baseline
from readmedoc.core.template import build_view, render_page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of one conversion.

    Exactly one of the following holds: `error` is set; `out` is set (the
    page was written and no content is returned); or `html` holds the
    rendered page.
    """
    error: Optional[BaseException] = None
    html: Optional[str] = None
    out: Optional[Path] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        """Return the rendered HTML (None when written to `out`), raising any delivered error."""
        if self.error is not None:
            raise self.error
        return self.html


class Completion:
    """Delivery point of a conversion. Settles at most once."""

    def __init__(self):
        self._result = None

    @property
    def settled(self):
        return self._result is not None

    @property
    def result(self):
        return self._result

    def settle(self, result):
        if self._result is not None:
            raise RuntimeError("Conversion result has already been delivered.")
        self._result = result
        return result

    def fail(self, error):
        return self.settle(ConversionResult(error=error))

    def succeed(self, html=None, out=None):
        return self.settle(ConversionResult(html=html, out=out))


def _check_file(file):
    if not isinstance(file, (str, os.PathLike)):
        raise ConfigurationError(
            f"invalid argument. First argument must be a string. Value: `{file!r}`."
        )


def _resolve(cwd, path):
    try:
        return (cwd / path).resolve()
    except ValueError as e:
        # pathlib rejects embedded null bytes
        raise ConfigurationError(f"invalid path. Value: `{path!r}`. {e}") from e


async def _run(src, out, opts, renderer, log):
    done = Completion()
    loop = asyncio.get_running_loop()

    log.debug("Reading file...")
    try:
        text = await loop.run_in_executor(None, partial(src.read_text, encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        log.error(f"Encountered an error when attempting to read file: {e}")
        return done.fail(e)
    log.debug("Successfully read file.")

    log.debug("Converting file content to HTML...")
    try:
        html = render_baseline(text, renderer=renderer, log=log)
    except Exception as e:
        log.error(f"Encountered an error when converting file content to HTML: {e}")
        return done.fail(e)
    log.debug("Successfully converted file content to HTML.")

    if not opts.fragment:
        try:
            html = render_page(build_view(opts, html), log=log)
        except Exception as e:
            log.error(f"Encountered an error when rendering HTML page: {e}")
            return done.fail(e)

    if out is None:
        return done.succeed(html=html)

    log.debug("Writing to file...")
    try:
        await loop.run_in_executor(None, partial(out.write_text, html, encoding='utf-8'))
    except OSError as e:
        log.error(f"Encountered an error when writing to file: {e}")
        return done.fail(e)
    log.debug("Successfully wrote to file.")
    return done.succeed(out=out)


def convert_async(file, options=None, *, renderer=None, log=None):
    """
    Converts a package README to HTML.

    Arguments and options are validated synchronously, before any I/O is
    scheduled; the returned awaitable then reads, converts, renders and
    optionally writes, resolving to a single `ConversionResult`. Failures
    after validation are delivered in the result, never raised.

    Args:
        file (str or os.PathLike): input file path, relative to the current working directory.
        options (Mapping or Options, optional): see `readmedoc.core.options.Options`.
        renderer (callable, optional): equation image renderer `(label, alt, raw) -> str`.
        log (logging.Logger, optional): diagnostic logger.

    Returns:
        Awaitable[ConversionResult]

    Raises:
        ConfigurationError: invalid file argument or options.

    Example:
        >>> result = await convert_async('README.md', {'title': 'beep boop'})
        >>> html = result.unwrap()
    """
    log = log or logger
    _check_file(file)
    opts = validate(options)

    cwd = Path(os.getcwd())
    log.debug(f"Current working directory: {cwd}")

    src = _resolve(cwd, file)
    log.debug(f"Source filepath: {src}")

    out = None
    if opts.out:
        out = _resolve(cwd, opts.out)
        log.debug(f"Destination filepath: {out}")

    return _run(src, out, opts, renderer, log)


def convert(file, options=None, callback=None, *, renderer=None, log=None):
    """
    Blocking form of `convert_async`.

    `callback`, when given, is invoked exactly once as `callback(error, html)`.
    As with the callback API this mirrors, the options may be omitted and the
    callback passed second: `convert(file, callback)`.

    Returns:
        ConversionResult
    """
    if callback is None and callable(options):
        options, callback = None, options
    if callback is not None and not callable(callback):
        raise ConfigurationError(
            f"invalid argument. Callback argument must be a function. Value: `{callback!r}`."
        )

    result = asyncio.run(convert_async(file, options, renderer=renderer, log=log))
    if callback is not None:
        callback(result.error, result.html)
    return result
