# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""简繁转换函数缓存模块"""

from collections.abc import Callable

from opencc import OpenCC

from ReaderText.common.logger import logger

from .models import MODE_CONFIGS, ConversionMode, Converter


def build_converter(mode: ConversionMode) -> Converter:
    """为指定模式构建转换函数 (加载对应的 OpenCC 词典)"""
    return OpenCC(MODE_CONFIGS[mode]).convert


class ConverterCache:
    """按转换模式缓存转换函数。

    每个模式的转换函数在第一次使用时构建, 之后一直复用, 不会失效 (转换表是静态的)。
    并发情况下同一模式可能被构建两次, 但只有先写入的那个会被保留, 因此不需要加锁。
    """

    __slots__ = ("_builder", "_converters")

    def __init__(self, builder: Callable[[ConversionMode], Converter] = build_converter) -> None:
        self._builder = builder
        self._converters: dict[ConversionMode, Converter] = {}

    def get(self, mode: ConversionMode | str | None) -> Converter | None:
        """获取模式对应的转换函数, OFF (及无法识别的模式) 返回 None"""
        mode = ConversionMode.parse(mode)
        if mode == ConversionMode.OFF:
            return None

        converter = self._converters.get(mode)
        if converter is None:
            logger.debug(f"构建简繁转换函数: {mode}")
            converter = self._converters.setdefault(mode, self._builder(mode))
        return converter

    def __contains__(self, mode: object) -> bool:
        return mode in self._converters

    def __len__(self) -> int:
        return len(self._converters)
