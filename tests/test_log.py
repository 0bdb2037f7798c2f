import logging
from logging.handlers import RotatingFileHandler

from pi_clock.core.log import configure_logging


def _ours(root):
    return [h for h in root.handlers if type(h) in (logging.StreamHandler, RotatingFileHandler)]


class TestConfigureLogging:
    def test_installs_console_and_file(self, tmp_path):
        root = logging.getLogger()
        configure_logging("debug", str(tmp_path / "clock.log"))
        try:
            assert root.level == logging.DEBUG
            assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            configure_logging("WARNING", None)

    def test_reconfiguring_does_not_duplicate_handlers(self, tmp_path):
        root = logging.getLogger()
        before = len(_ours(root))
        configure_logging("INFO", str(tmp_path / "clock.log"))
        configure_logging("INFO", None)
        configure_logging("INFO", None)

        assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert len(_ours(root)) <= before + 1
        configure_logging("WARNING", None)
