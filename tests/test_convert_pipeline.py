import asyncio
import logging
from pathlib import Path
from unittest import mock

import pytest

from readmedoc.core.convert import Completion, ConversionResult, convert, convert_async
from readmedoc.core.errors import ConfigurationError, MalformedBlockError, MalformedMarkerError

README = """# Beep

Boop.

<!-- <equation label="eq1" alt="x squared" raw="x^2"> -->

<!-- </equation> -->
"""


def fake_renderer(label, alt, raw):
    return f'<div class="equation" data-equation="eq:{label}"><img src="equation_{label}.svg" alt="{alt}"></div>'


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "README.md").write_text(README, encoding="utf-8")
    return tmp_path


def run(file, options=None, **kwargs):
    kwargs.setdefault("renderer", fake_renderer)
    return asyncio.run(convert_async(file, options, **kwargs))


def test_returns_full_page(workdir):
    result = run("README.md", {"title": "beep boop", "tests": "https://example.com/tests"})

    assert result.ok
    assert result.out is None
    assert result.html.startswith("<!DOCTYPE html>")
    assert "<title>beep boop</title>" in result.html
    assert 'href="https://example.com/tests"' in result.html
    assert 'data-equation="eq:eq1"' in result.html
    assert list(workdir.iterdir()) == [workdir / "README.md"]


def test_fragment_skips_template(workdir):
    result = run("README.md", {"fragment": True, "title": "beep", "head": "<style>x</style>", "source": "https://example.com"})

    assert result.ok
    assert result.html.startswith('<h1 id="beep">Beep</h1>')
    assert "<html" not in result.html
    assert "<title>" not in result.html
    assert "<style>x</style>" not in result.html
    assert "<nav" not in result.html
    assert 'data-equation="eq:eq1"' in result.html


def test_writes_output_and_returns_no_content(workdir):
    result = run("README.md", {"out": "x.html"})

    assert result.ok
    assert result.html is None
    assert result.out == (workdir / "x.html").resolve()
    written = (workdir / "x.html").read_text(encoding="utf-8")
    assert "<!DOCTYPE html>" in written
    assert 'data-equation="eq:eq1"' in written


def test_absolute_source_path(workdir, tmp_path_factory):
    other = tmp_path_factory.mktemp("other") / "README.md"
    other.write_text("# Other\n", encoding="utf-8")
    result = run(str(other), {"fragment": True})
    assert result.html == '<h1 id="other">Other</h1>'


def test_missing_source_delivers_error(workdir):
    result = run("MISSING.md", {"out": "x.html"})

    assert not result.ok
    assert isinstance(result.error, FileNotFoundError)
    assert result.html is None
    assert not (workdir / "x.html").exists()


def test_undecodable_source_delivers_error(workdir):
    (workdir / "LATIN1.md").write_bytes("caf\xe9".encode("latin-1"))
    result = run("LATIN1.md")
    assert isinstance(result.error, UnicodeDecodeError)


def test_conversion_error_is_delivered_and_nothing_written(workdir):
    (workdir / "BROKEN.md").write_text(
        '<!-- <equation label="eq1" alt="a" raw="x^2"> -->\n\ntext\n\nmore text\n\n<!-- </equation> -->\n',
        encoding="utf-8",
    )
    result = run("BROKEN.md", {"out": "x.html"})

    assert isinstance(result.error, MalformedBlockError)
    assert not (workdir / "x.html").exists()


def test_malformed_marker_is_delivered(workdir):
    (workdir / "BROKEN.md").write_text(
        '<!-- <equation alt="a" raw="x^2"> -->\n<!-- </equation> -->\n',
        encoding="utf-8",
    )
    result = run("BROKEN.md")

    assert isinstance(result.error, MalformedMarkerError)
    assert result.error.attribute == "label"
    with pytest.raises(MalformedMarkerError):
        result.unwrap()


def test_write_error_is_delivered(workdir):
    result = run("README.md", {"out": "missing_dir/x.html"})
    assert isinstance(result.error, OSError)
    assert result.out is None


def test_invalid_options_raise_before_reading(workdir):
    with mock.patch.object(Path, "read_text") as read_text:
        with pytest.raises(ConfigurationError):
            convert_async("README.md", "beep")
        with pytest.raises(ConfigurationError):
            convert_async("README.md", {"beep": "boop"})
        with pytest.raises(ConfigurationError):
            convert_async(5)
    read_text.assert_not_called()


def test_null_byte_paths_raise_configuration_error(workdir):
    with pytest.raises(ConfigurationError):
        convert_async("READ\0ME.md")
    with pytest.raises(ConfigurationError):
        convert_async("README.md", {"out": "x\0.html"})
    with pytest.raises(ConfigurationError):
        convert("READ\0ME.md", {}, mock.Mock())


def test_injected_logger_receives_stage_messages(workdir, caplog):
    log = logging.getLogger("tests.pipeline")
    with caplog.at_level(logging.DEBUG, logger="tests.pipeline"):
        run("README.md", {"fragment": True}, log=log)
    messages = [r.getMessage() for r in caplog.records if r.name == "tests.pipeline"]
    assert "Reading file..." in messages
    assert "Successfully converted file content to HTML." in messages


def test_convert_invokes_callback_once_with_html(workdir):
    callback = mock.Mock()
    result = convert("README.md", {"fragment": True}, callback, renderer=fake_renderer)

    callback.assert_called_once_with(None, result.html)
    assert result.html.startswith('<h1 id="beep">')


def test_convert_callback_as_second_argument(workdir):
    callback = mock.Mock()
    convert("README.md", callback, renderer=fake_renderer)

    callback.assert_called_once()
    error, html = callback.call_args.args
    assert error is None
    assert "<!DOCTYPE html>" in html


def test_convert_invokes_callback_once_with_error(workdir):
    callback = mock.Mock()
    result = convert("MISSING.md", None, callback)

    callback.assert_called_once_with(result.error, None)
    assert isinstance(result.error, FileNotFoundError)


def test_convert_callback_must_be_callable(workdir):
    with pytest.raises(ConfigurationError):
        convert("README.md", {}, "not a function")


def test_completion_settles_once():
    done = Completion()
    assert not done.settled
    result = done.succeed(html="<p>x</p>")
    assert done.settled
    assert done.result is result
    with pytest.raises(RuntimeError):
        done.fail(ValueError("late"))
    assert done.result == ConversionResult(html="<p>x</p>")
