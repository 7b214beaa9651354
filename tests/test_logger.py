"""Tests for verbosity-controlled logging."""

import io

from fieldtoc.logger import fields_enabled, get_logger, headings_enabled, setup_logger


class TestVerbosity:
    """Test the mapping of verbosity levels to logger output."""

    def test_silent_by_default(self) -> None:
        stream = io.StringIO()
        setup_logger(0, stream)

        get_logger().headings("heading")
        get_logger().fields("field")
        get_logger().error("broken")

        assert not headings_enabled()
        assert stream.getvalue() == "broken\n"

    def test_headings_level(self) -> None:
        stream = io.StringIO()
        setup_logger(1, stream)

        get_logger().headings("heading")
        get_logger().fields("field")

        assert headings_enabled()
        assert not fields_enabled()
        assert stream.getvalue() == "heading\n"

    def test_fields_level(self) -> None:
        stream = io.StringIO()
        setup_logger(2, stream)

        get_logger().fields("field")
        get_logger().debug("detail")

        assert fields_enabled()
        assert stream.getvalue() == "field\n"

    def test_debug_level(self) -> None:
        stream = io.StringIO()
        setup_logger(3, stream)

        get_logger().debug("detail")

        assert stream.getvalue() == "detail\n"
