"""
Tests for logging helpers.
"""

import io
import json
import logging
import sys
from typing import Iterator

import pytest

from txgas.utils.logging import (
    JsonFormatter,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)


@pytest.fixture(autouse=True)
def restore_txgas_logger() -> Iterator[None]:
    root = logging.getLogger("txgas")
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestGetLogger:
    """Tests for logger naming."""

    def test_module_name_kept(self) -> None:
        """Test loggers already under txgas keep their name."""
        assert get_logger("txgas.providers.gas").name == "txgas.providers.gas"

    def test_foreign_name_prefixed(self) -> None:
        """Test other names are moved under txgas."""
        assert get_logger("myapp").name == "txgas.myapp"

    def test_root_has_null_handler(self) -> None:
        """Test the library installs a NullHandler."""
        root = logging.getLogger("txgas")
        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


class TestConfigureLogging:
    """Tests for configure_logging and level helpers."""

    def test_json_output_includes_extra(self) -> None:
        """Test JSON lines carry the message and extra fields."""
        stream = io.StringIO()
        configure_logging("DEBUG", json_format=True, handler=logging.StreamHandler(stream))

        get_logger("txgas.test").info("Cached block gas limit", extra={"gas": 28_500_000})

        payload = json.loads(stream.getvalue().strip())
        assert payload["msg"] == "Cached block gas limit"
        assert payload["level"] == "INFO"
        assert payload["gas"] == 28_500_000

    def test_reconfigure_replaces_handler(self) -> None:
        """Test repeated calls do not stack handlers."""
        root = configure_logging()
        configure_logging()

        configured = [h for h in root.handlers if getattr(h, "_txgas_configured", False)]
        assert len(configured) == 1

    def test_level_helpers(self) -> None:
        """Test set_level and enable_debug change the txgas level."""
        set_level(logging.ERROR)
        assert logging.getLogger("txgas").level == logging.ERROR

        enable_debug()
        assert logging.getLogger("txgas").level == logging.DEBUG

    def test_disable_logging(self) -> None:
        """Test disable_logging silences the hierarchy."""
        stream = io.StringIO()
        configure_logging(handler=logging.StreamHandler(stream))

        disable_logging()
        get_logger("txgas.providers.gas").warning("hidden")

        assert stream.getvalue() == ""


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_exception_info(self) -> None:
        """Test exception tracebacks are included."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "txgas", logging.ERROR, __file__, 1, "failed", None, None
            )
            record.exc_info = sys.exc_info()

        payload = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad" in payload["exc_info"]
