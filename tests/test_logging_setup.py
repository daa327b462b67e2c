import logging

import pytest

from taskgen.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_installs_console_and_file_handlers(tmp_path, restore_root_logger):
    setup_logging("DEBUG", tmp_path)

    root = restore_root_logger
    kinds = [type(handler) for handler in root.handlers]
    assert logging.StreamHandler in kinds
    assert logging.FileHandler in kinds

    logging.getLogger("taskgen.tests").info("hello from tests")
    for handler in root.handlers:
        handler.flush()

    log_file = tmp_path / "taskgen.log"
    assert log_file.exists()
    assert "hello from tests" in log_file.read_text(encoding="utf-8")


def test_setup_logging_without_dir_is_console_only(restore_root_logger):
    setup_logging("WARNING")

    root = restore_root_logger
    assert [type(handler) for handler in root.handlers] == [logging.StreamHandler]
    assert root.handlers[0].level == logging.WARNING
