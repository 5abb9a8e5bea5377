# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""配置模块

配置以 JSON 对象的形式保存, 文件中缺失的项使用默认值。
配置值可能来自旧版本保存的文件, 读取方需要自行校验 (例如未知的转换模式应视为 off)。
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from ReaderText.common.error import ConfigError
from ReaderText.common.logger import logger

CONFIG_PATH_ENV = "READERTEXT_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "chinese_conversion_mode": "off",
    "custom_conversion_rules": [],  # [{"from": "...", "to": "..."}]
    "code_language_detection": True,
}


class Config(dict):
    """字典形式的配置, 可从 JSON 文件加载并保存"""

    def __init__(self, path: Path | str | None = None) -> None:
        super().__init__(copy.deepcopy(DEFAULT_CONFIG))
        self.path = Path(path) if path else None
        if self.path is not None and self.path.is_file():
            self.load(self.path)

    def load(self, path: Path | str) -> None:
        """从 JSON 文件加载配置, 文件不存在时保持默认值

        Raises:
            ConfigError: 文件存在但不是合法的 JSON 对象

        """
        path = Path(path)
        if not path.is_file():
            logger.info(f"配置文件 {path} 不存在, 使用默认配置")
            return

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"配置文件 {path} 不是合法的 JSON: {e}"
            raise ConfigError(msg) from e
        if not isinstance(data, dict):
            msg = f"配置文件 {path} 的内容必须是 JSON 对象"
            raise ConfigError(msg)

        self.update(data)
        logger.debug(f"已加载配置文件 {path}")

    def save(self, path: Path | str | None = None) -> None:
        """保存配置到 JSON 文件"""
        target = Path(path) if path else self.path
        if target is None:
            msg = "未指定配置文件路径"
            raise ConfigError(msg)

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self, ensure_ascii=False, indent=4), encoding="utf-8")
        logger.debug(f"已保存配置文件 {target}")

    def reset(self) -> None:
        self.clear()
        self.update(copy.deepcopy(DEFAULT_CONFIG))


def _load_default_config() -> Config:
    path = os.environ.get(CONFIG_PATH_ENV)
    try:
        return Config(path)
    except ConfigError:
        logger.exception("配置文件加载失败, 使用默认配置")
        config = Config()
        config.path = Path(path) if path else None
        return config


cfg = _load_default_config()
