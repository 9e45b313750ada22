"""Tests for the logging helpers."""

import io
import logging

from promptline.logging import disable, enable, get_logger, set_level, setup_logging


class TestLogging:
    """Tests for promptline.logging."""

    def test_child_logger_names(self) -> None:
        assert get_logger("core.prompt").name == "promptline.core.prompt"
        assert get_logger("promptline.config").name == "promptline.config"

    def test_setup_logging_stream(self) -> None:
        """Records from child loggers reach the configured stream."""
        stream = io.StringIO()
        setup_logging("DEBUG", format="%(name)s %(message)s", stream=stream)

        get_logger("core.prompt").debug("hello")

        assert stream.getvalue() == "promptline.core.prompt hello\n"

    def test_setup_logging_file(self, tmp_path) -> None:
        path = tmp_path / "prompts.log"
        setup_logging("INFO", format="%(message)s", file=str(path))

        get_logger("tasks").info("written")
        for handler in logging.getLogger("promptline").handlers:
            handler.flush()

        assert path.read_text() == "written\n"

    def test_set_level_and_disable(self) -> None:
        stream = io.StringIO()
        setup_logging("WARNING", format="%(message)s", stream=stream)
        log = get_logger("indicator")

        log.info("hidden")
        set_level("info")
        log.info("shown")
        disable()
        log.warning("muted")
        enable()

        assert stream.getvalue() == "shown\n"
