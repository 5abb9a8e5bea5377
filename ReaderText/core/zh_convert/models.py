# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""数据模型定义模块"""

from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from ReaderText.common.logger import logger

Converter = Callable[[str], str]


class ConversionMode(str, Enum):
    """简繁转换模式"""

    OFF = "off"  # 不转换
    S2TW = "s2tw"  # 简体 -> 繁体 (台湾)
    S2HK = "s2hk"  # 简体 -> 繁体 (香港)
    T2S = "t2s"  # 繁体 -> 简体

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: "str | ConversionMode | None") -> "ConversionMode":
        """解析保存在配置中的模式, 无法识别的值视为 OFF"""
        if isinstance(raw, ConversionMode):
            return raw
        if not raw:
            return cls.OFF
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.debug(f"未知的简繁转换模式: {raw!r}, 视为 off")
            return cls.OFF


# 各模式对应的 OpenCC 配置, 只转换字形与异体字, 不替换地区用词 (如 软件 -> 軟件 而非 軟體)
MODE_CONFIGS: dict[ConversionMode, str] = {
    ConversionMode.S2TW: "s2tw",
    ConversionMode.S2HK: "s2hk",
    ConversionMode.T2S: "t2s",
}


class ConversionRule(NamedTuple):
    """自定义替换规则, 在简繁转换之后按字面量替换"""

    from_: str
    to: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_, "to": self.to}
