# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""日志模块

整个项目共享同一个 logger, 使用方式:

    from ReaderText.common.logger import logger
"""

import logging
import os
import sys

LOGGER_NAME = "ReaderText"
LOG_FORMAT = "[%(asctime)s][%(levelname)s][%(module)s:%(lineno)d] %(message)s"
LOG_LEVEL_ENV = "READERTEXT_LOG_LEVEL"


def _resolve_level(raw: str | None) -> int:
    """将环境变量中的日志等级名称转换为 logging 等级, 无法识别时使用 INFO"""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger() -> logging.Logger:
    _logger = logging.getLogger(LOGGER_NAME)
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)
    _logger.setLevel(_resolve_level(os.environ.get(LOG_LEVEL_ENV)))
    return _logger


logger = get_logger()
