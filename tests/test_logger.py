import io
import logging

from zoomkit.logger import setup_logging


def test_authorization_values_are_redacted():
    stream = io.StringIO()
    setup_logging(level="DEBUG", stream=stream)

    logging.getLogger("zoomkit.test").debug("headers: Authorization=Bearer %s", "abc.def-123")
    logging.getLogger("zoomkit.test").debug("Basic Y2xpOnNlYw==")

    output = stream.getvalue()
    assert "abc.def-123" not in output
    assert "Y2xpOnNlYw==" not in output
    assert "Bearer [REDACTED]" in output
    assert "Basic [REDACTED]" in output


def test_verbose_forces_debug():
    setup_logging(level="ERROR", verbose=True, stream=io.StringIO())
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    setup_logging(level="chatty", stream=io.StringIO())
    assert logging.getLogger().level == logging.INFO


def test_http_libraries_quietened():
    setup_logging(level="DEBUG", stream=io.StringIO())
    assert logging.getLogger("urllib3").level == logging.WARNING
