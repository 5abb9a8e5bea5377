# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""文章简繁转换模块

对纯文本与 HTML 进行简繁转换, 并在转换后应用用户自定义的替换规则。
"""

import dataclasses
from collections.abc import Iterable, Sequence

from bs4 import ParserRejectedMarkup

from ReaderText.common.logger import logger
from ReaderText.common.models import Entry

from .cache import ConverterCache, build_converter
from .html_walk import SKIP_TEXT_NODE_TAGS, convert_text_nodes, parse_fragment, serialize_fragment
from .models import ConversionMode, ConversionRule
from .rules import RuleLike, apply_custom_rules, custom_rules_fingerprint, normalize_custom_rules

__all__ = [
    "SKIP_TEXT_NODE_TAGS",
    "ChineseConverter",
    "ConversionMode",
    "ConversionRule",
    "ConverterCache",
    "build_converter",
    "custom_rules_fingerprint",
    "normalize_custom_rules",
]


class ChineseConverter:
    """简繁转换入口

    持有一个 ConverterCache, 同一进程内应只创建一个实例 (或共享同一个 cache),
    以保证每种模式的转换函数只构建一次。
    """

    __slots__ = ("cache",)

    def __init__(self, cache: ConverterCache | None = None) -> None:
        self.cache = cache if cache is not None else ConverterCache()

    def convert_text(self, text: str, mode: ConversionMode | str, rules: Sequence[RuleLike]) -> str:
        """转换纯文本: 先进行简繁转换, 再按顺序应用自定义规则

        Args:
            text (str): 原文
            mode (ConversionMode | str): 转换模式, OFF 时跳过简繁转换
            rules (Sequence[RuleLike]): 自定义替换规则, 按原样应用 (不去除空白)

        Returns:
            str: 转换后的文本

        """
        converter = self.cache.get(mode)
        if converter is None and not rules:
            return text

        converted = converter(text) if converter is not None else text
        return apply_custom_rules(converted, rules) if rules else converted

    def convert_html(self, html: str, mode: ConversionMode | str, rules: Sequence[RuleLike]) -> str:
        """转换 HTML 中的正文文本

        按 HTML5 片段解析, style/script/code/pre/textarea/noscript 内的文本保持原样,
        元素结构、属性 (含顺序)、注释与空白不会被修改。无需转换或 HTML 无法解析时原样返回输入。
        """
        if not html:
            return html
        mode = ConversionMode.parse(mode)
        if mode == ConversionMode.OFF and not rules:
            return html

        rules = list(rules or ())
        try:
            root = parse_fragment(html)
        except ParserRejectedMarkup:
            logger.warning("HTML 解析失败, 跳过简繁转换")
            return html

        changed = convert_text_nodes(root, lambda text: self.convert_text(text, mode, rules))
        logger.debug(f"简繁转换 ({mode}) 改写了 {changed} 个文本节点")
        return serialize_fragment(root)

    def convert_entry(self, entry: Entry, mode: ConversionMode | str, custom_rules: Iterable[RuleLike] | None) -> Entry:
        """转换文章的标题与正文

        模式为 OFF 且没有自定义规则时直接返回传入的 entry 对象本身,
        调用方可以据此用 `is` 判断是否发生了转换。
        """
        rules = normalize_custom_rules(custom_rules)
        mode = ConversionMode.parse(mode)
        if mode == ConversionMode.OFF and not rules:
            return entry

        return dataclasses.replace(
            entry,
            title=self.convert_text(entry.title, mode, rules),
            content=self.convert_html(entry.content, mode, rules) if entry.content else entry.content,
        )
