# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""从文章 HTML 中提取代码块并确定其语言"""

from collections.abc import Iterable

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from ReaderText.common.logger import logger

from .detector import detect_code_language, normalize_code_language
from .models import CodeBlock, CodeLanguage


def _class_tokens(tag: Tag) -> list[str]:
    classes = tag.get("class")
    if not classes:
        return []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def _normalize_code_text(text: str) -> str:
    """统一换行符并去掉末尾多余的空行 (至少保留一行)"""
    lines = text.replace("\r\n", "\n").split("\n")
    while len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return "\n".join(lines)


def detect_language_from_class_tokens(tokens: Iterable[str]) -> CodeLanguage:
    """从 class 列表中找出第一个能识别的语言 (如 language-python), 都无法识别时返回 TEXT"""
    for token in tokens:
        language = normalize_code_language(token)
        if language != CodeLanguage.TEXT:
            return language
    return CodeLanguage.TEXT


def detect_pre_language(pre: Tag, code: str, *, detect: bool = True) -> CodeLanguage:
    """确定 <pre> 代码块的语言

    依次尝试: <pre> 自身的 class, 直接子元素 <code> 的 class, 最后根据代码内容猜测。
    detect 为 False 时不根据内容猜测, 没有声明语言的代码块返回 TEXT。
    """
    language = detect_language_from_class_tokens(_class_tokens(pre))
    if language != CodeLanguage.TEXT:
        return language

    for child in pre.find_all("code", recursive=False):
        language = detect_language_from_class_tokens(_class_tokens(child))
        if language != CodeLanguage.TEXT:
            return language

    return detect_code_language(code) if detect else CodeLanguage.TEXT


def extract_code_blocks(html: str, *, detect: bool = True) -> list[CodeBlock]:
    """提取 HTML 中所有 <pre> 代码块的文本与语言"""
    if not html:
        return []

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup:
        logger.warning("HTML 解析失败, 无法提取代码块")
        return []

    blocks: list[CodeBlock] = []
    for pre in soup.find_all("pre"):
        code = _normalize_code_text(pre.get_text())
        if not code.strip():
            continue
        blocks.append(CodeBlock(code=code, language=detect_pre_language(pre, code, detect=detect)))

    logger.debug(f"从 HTML 中提取到 {len(blocks)} 个代码块")
    return blocks
