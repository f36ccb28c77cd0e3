import io
import json
import logging
import sys

from extsort.logging_config import FastFormatter, JsonFormatter, setup_logging


def test_json_formatter_outputs_expected_fields():
    record = logging.LogRecord(
        name="extsort.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=123,
        msg="hello",
        args=(),
        exc_info=None,
    )

    formatter = JsonFormatter()
    payload = json.loads(formatter.format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "extsort.test"
    assert payload["message"] == "hello"
    assert payload["pathname"] == __file__
    assert payload["lineno"] == 123
    assert "timestamp" in payload
    assert "thread" in payload
    assert "process" in payload


def test_json_formatter_includes_exc_info():
    formatter = JsonFormatter()
    try:
        raise ValueError("boom")
    except Exception:
        record = logging.LogRecord(
            name="extsort.test",
            level=logging.ERROR,
            pathname=__file__,
            lineno=55,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = json.loads(formatter.format(record))
    assert "exc_info" in payload
    assert "ValueError" in payload["exc_info"]


def test_fast_formatter_uses_level_specific_layout():
    formatter = FastFormatter(enable_colors=False)
    record = logging.LogRecord("extsort.x", logging.WARNING, __file__, 1, "careful", (), None)
    assert "WARNING [extsort.x] careful" in formatter.format(record)


def test_setup_logging_is_reentrant(tmp_path):
    first = io.StringIO()
    second = io.StringIO()
    log_file = tmp_path / "logs" / "extsort.log"

    setup_logging("INFO", stream=first)
    result = setup_logging("INFO", json_format=True, stream=second, log_file=str(log_file))

    logging.getLogger("extsort.app.controller").info("moved %s", "a.txt")
    for handler in result["handlers"].values():
        handler.flush()

    assert first.getvalue() == ""
    assert json.loads(second.getvalue().splitlines()[-1])["message"] == "moved a.txt"
    assert "moved a.txt" in log_file.read_text(encoding="utf-8")
