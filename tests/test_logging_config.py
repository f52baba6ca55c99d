import logging

from quizcore.logging_config import ENV_LOG_LEVEL, configure_logging


def test_configure_logging_env_override(monkeypatch):
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
        configure_logging(logging.WARNING)
        assert root.level == logging.DEBUG
        configure_logging(logging.WARNING)
        assert len(root.handlers) == 1
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
