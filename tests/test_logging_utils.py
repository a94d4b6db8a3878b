import logging
from logging.handlers import RotatingFileHandler

from utils import logging_utils
from utils.logging_utils import configure_logging


def test_configure_logging_adds_handlers_once(monkeypatch, tmp_path):
    monkeypatch.setattr(logging_utils, "_configured", False)
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    log_file = tmp_path / "logs" / "codec.log"

    try:
        configure_logging("DEBUG", str(log_file))
        configure_logging("WARNING", str(log_file))

        added = [handler for handler in root.handlers if handler not in before]
        assert len(added) == 2
        assert sum(isinstance(handler, RotatingFileHandler) for handler in added) == 1
        assert log_file.parent.is_dir()
        assert root.level == logging.WARNING
        assert not hasattr(root, "_questionnaire_configured")
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
