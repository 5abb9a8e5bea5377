# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""代码语言识别与语言标签归一化"""

import json

from ReaderText.common.logger import logger

from ._logic import parse_json
from .models import CodeLanguage
from .rules import ALL_RULES


LANGUAGE_ALIASES: dict[str, CodeLanguage] = {
    "cjs": CodeLanguage.JAVASCRIPT,
    "c++": CodeLanguage.CPP,
    "go": CodeLanguage.GO,
    "js": CodeLanguage.JAVASCRIPT,
    "jsonc": CodeLanguage.JSON,
    "json5": CodeLanguage.JSON,
    "kt": CodeLanguage.KOTLIN,
    "plaintext": CodeLanguage.TEXT,
    "md": CodeLanguage.MARKDOWN,
    "mts": CodeLanguage.TYPESCRIPT,
    "plain": CodeLanguage.TEXT,
    "py": CodeLanguage.PYTHON,
    "rs": CodeLanguage.RUST,
    "sh": CodeLanguage.BASH,
    "shell": CodeLanguage.BASH,
    "shellscript": CodeLanguage.BASH,
    "ts": CodeLanguage.TYPESCRIPT,
    "yml": CodeLanguage.YAML,
    "zsh": CodeLanguage.BASH,
}

LANGUAGE_PREFIXES = ("language-", "lang-")


def detect_code_language(code: str) -> CodeLanguage:
    """根据代码内容猜测语言

    按 ALL_RULES 的顺序逐条判定, 第一条命中的规则决定结果, 都不命中时返回 TEXT。
    任何输入都不会抛出异常。

    Args:
        code (str): 代码文本

    Returns:
        CodeLanguage: 语言标签

    """
    if not isinstance(code, str):
        return CodeLanguage.TEXT

    trimmed = code.strip()
    if not trimmed:
        return CodeLanguage.TEXT

    for rule in ALL_RULES:
        language = rule.match(trimmed)
        if language is not None:
            logger.debug(f"代码语言识别命中规则 {rule.name} -> {language}")
            return language

    return CodeLanguage.TEXT


def normalize_code_language(raw_language: str | None) -> CodeLanguage:
    """将代码块声明的语言 (如 class 中的 language-ts) 归一化为语言标签, 无法识别时返回 TEXT"""
    if not raw_language:
        return CodeLanguage.TEXT

    normalized = raw_language.strip().lower()
    # 依次去除 language- 与 lang- 前缀, 两者可以同时出现
    for prefix in LANGUAGE_PREFIXES:
        normalized = normalized.removeprefix(prefix)
    if normalized in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[normalized]

    try:
        return CodeLanguage(normalized)
    except ValueError:
        logger.debug(f"未知的代码语言标签: {raw_language!r}")
        return CodeLanguage.TEXT


def resolve_code_language(code: str, hint: str | None = None) -> CodeLanguage:
    """确定代码块的语言: 优先使用声明的语言, 无法识别时根据内容猜测"""
    declared = normalize_code_language(hint)
    if declared != CodeLanguage.TEXT:
        return declared
    return detect_code_language(code)


def format_code_for_language(code: str, language: CodeLanguage) -> str:
    """对 JSON 进行格式化 (2 空格缩进), 其他语言及无法解析的 JSON 原样返回"""
    if language != CodeLanguage.JSON:
        return code

    try:
        parsed = parse_json(code)
    except (ValueError, RecursionError):
        return code
    return json.dumps(parsed, ensure_ascii=False, indent=2)
