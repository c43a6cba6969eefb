import logging

import pytest

from crtbp.logging_config import setup_logging


CORE_LOGGERS = ("crtbp.algorithms", "crtbp.models", "crtbp.utils")


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    yield
    for name in ("",) + CORE_LOGGERS:
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])


def test_file_handlers(tmp_path, restore_logging):
    log_dir = tmp_path / "logs"
    setup_logging(log_dir=str(log_dir))

    assert (log_dir / "crtbp.log").exists()
    assert (log_dir / "error.log").exists()
    core = logging.getLogger("crtbp.algorithms")
    assert core.level == logging.DEBUG
    assert not core.propagate
    assert len(core.handlers) == 2


def test_console_only(tmp_path, restore_logging):
    setup_logging(default_level=logging.WARNING, log_dir=str(tmp_path / "unused"), log_to_file=False)

    assert not (tmp_path / "unused").exists()
    assert logging.getLogger().level == logging.WARNING
    assert len(logging.getLogger("crtbp.models").handlers) == 1
