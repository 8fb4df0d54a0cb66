import logging
from thermolink.logging_config import ShortFormatter, reset_logging, setup_logging

def test_short_formatter_uses_last_name_component():
    rec = logging.LogRecord("thermolink.controller.ControlLoop", logging.INFO, __file__, 1, "hi", None, None, func="run_cycle")
    out = ShortFormatter("[%(shortname)s.%(funcName)s] %(message)s").format(rec)
    assert out == "[ControlLoop.run_cycle] hi"

def test_setup_logging_once_with_file(tmp_path):
    root = logging.getLogger(); saved = root.handlers[:], root.level
    reset_logging()
    try:
        log_file = tmp_path / "logs" / "agent.log"
        setup_logging(level="debug", log_file=str(log_file))
        assert root.level == logging.DEBUG
        n = len(root.handlers)
        setup_logging(level="ERROR")
        assert len(root.handlers) == n and root.level == logging.DEBUG
        logging.getLogger("thermolink.test").info("written")
        for h in root.handlers: h.flush()
        assert "written" in log_file.read_text()
    finally:
        for h in root.handlers[:]:
            if h not in saved[0]:
                root.removeHandler(h); h.close()
        for h in saved[0]:
            if h not in root.handlers: root.addHandler(h)
        root.setLevel(saved[1])
        reset_logging()
