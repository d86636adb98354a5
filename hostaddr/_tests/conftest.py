from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import yaml

from hostaddr.util.config import config_path_for_filename


@pytest.fixture(name="root_path_populated_with_config")
def root_path_populated_with_config_fixture(tmp_path: Path) -> Path:
    logging_config = {"log_stdout": False, "log_filename": "log/debug.log", "log_level": "WARNING"}
    config = {"resolver": {"logging": logging_config, "endpoints": [{"host": "127.0.0.1", "port": 8444}]}}
    path = config_path_for_filename(tmp_path)
    path.parent.mkdir(parents=True)
    path.write_text(yaml.safe_dump(config))
    return tmp_path


@pytest.fixture(name="isolated_root_logger")
def isolated_root_logger_fixture() -> Iterator[logging.Logger]:
    # pytest attaches its own capture handlers to the root logger, only undo what the test added
    root_logger = logging.getLogger()
    level = root_logger.level
    handler_levels = {handler: handler.level for handler in root_logger.handlers}
    yield root_logger
    for handler in list(root_logger.handlers):
        if handler in handler_levels:
            handler.setLevel(handler_levels[handler])
        else:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
