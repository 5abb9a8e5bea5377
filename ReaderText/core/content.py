# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""文章内容处理流程

先按配置对文章进行简繁转换, 之后在渲染代码块时确定代码语言。
两个组件互不调用, 由这里组合。
"""

from collections.abc import Mapping
from typing import Any

from ReaderText.common.data.config import cfg
from ReaderText.common.logger import logger
from ReaderText.common.models import Entry

from .code_lang import CodeBlock, extract_code_blocks
from .zh_convert import ChineseConverter, ConversionMode, ConversionRule, normalize_custom_rules


class ContentPipeline:
    """文章内容处理流程, 转换参数从配置中读取"""

    def __init__(self, config: Mapping[str, Any] = cfg, converter: ChineseConverter | None = None) -> None:
        self.config = config
        self.converter = converter if converter is not None else ChineseConverter()

    @property
    def conversion_mode(self) -> ConversionMode:
        return ConversionMode.parse(self.config.get("chinese_conversion_mode"))

    @property
    def custom_rules(self) -> list[ConversionRule]:
        rules = self.config.get("custom_conversion_rules")
        if not isinstance(rules, list):
            logger.warning(f"自定义转换规则格式错误: {rules!r}, 已忽略")
            return []
        return normalize_custom_rules(rules)

    def prepare_entry(self, entry: Entry) -> Entry:
        """按配置转换文章, 无需转换时返回原对象"""
        return self.converter.convert_entry(entry, self.conversion_mode, self.custom_rules)

    def prepare_html(self, html: str) -> str:
        return self.converter.convert_html(html, self.conversion_mode, self.custom_rules)

    def code_blocks(self, html: str) -> list[CodeBlock]:
        """提取代码块; 关闭语言识别时, 没有声明语言的代码块统一视为 TEXT"""
        return extract_code_blocks(html, detect=bool(self.config.get("code_language_detection", True)))
