import io

import pytest

from pollwatch.logs import (
    flog,
    flogf,
    is_verbose,
    log,
    log_perror,
    logf,
    logf_perror,
    set_verbose,
    string_from_format,
)


@pytest.fixture(autouse=True)
def _reset_verbose():
    set_verbose(False)
    yield
    set_verbose(False)


def test_verbose_toggle():
    assert is_verbose() is False
    set_verbose(True)
    assert is_verbose() is True
    set_verbose(False)
    assert is_verbose() is False


def test_log_silent_when_not_verbose(capsys):
    log("hello")
    logf("%s", "hello")
    assert capsys.readouterr().out == ""


def test_log_prints_when_verbose(capsys):
    set_verbose(True)
    log("hello")
    assert capsys.readouterr().out == "hello"


def test_logf_formats(capsys):
    set_verbose(True)
    logf("%s:%d", "abc", 7)
    assert capsys.readouterr().out == string_from_format("%s:%d", "abc", 7)


def test_flog_writes_to_stream():
    stream = io.StringIO()
    flog(stream, "one")
    assert stream.getvalue() == ""
    set_verbose(True)
    flog(stream, "two")
    assert stream.getvalue() == "two"


def test_flogf_writes_formatted_to_stream():
    stream = io.StringIO()
    set_verbose(True)
    flogf(stream, "%s", "value")
    assert stream.getvalue() == "value"


def test_string_from_format_roundtrip_long_text():
    text = "x" * 2000
    assert string_from_format("%s", text) == text


def test_string_from_format_percent_escape():
    assert string_from_format("100%%") == "100%"


def test_string_from_format_without_args_keeps_text():
    assert string_from_format("plain text") == "plain text"


def test_log_perror_includes_current_error(capsys):
    set_verbose(True)
    try:
        raise FileNotFoundError(2, "No such file or directory")
    except OSError:
        log_perror("Cannot stat foo")
    err = capsys.readouterr().err
    assert err == "Cannot stat foo: No such file or directory\n"


def test_log_perror_without_error(capsys):
    set_verbose(True)
    log_perror("message")
    assert capsys.readouterr().err == "message\n"


def test_logf_perror_silent_when_not_verbose(capsys):
    logf_perror("Cannot stat %s", "foo")
    assert capsys.readouterr().err == ""


def test_logf_perror_formats(capsys):
    set_verbose(True)
    logf_perror("Cannot stat %s", "foo")
    assert capsys.readouterr().err.startswith("Cannot stat foo")