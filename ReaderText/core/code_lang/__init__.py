# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""代码语言识别模块

为没有声明语言的代码块猜测一个语法高亮用的语言标签。
"""

from .blocks import detect_language_from_class_tokens, extract_code_blocks
from .detector import detect_code_language, format_code_for_language, normalize_code_language, resolve_code_language
from .models import CODE_LANGUAGE_OPTIONS, CodeBlock, CodeLanguage, DetectRule
from .rules import ALL_RULES, get_rule

__all__ = [
    "ALL_RULES",
    "CODE_LANGUAGE_OPTIONS",
    "CodeBlock",
    "CodeLanguage",
    "DetectRule",
    "detect_code_language",
    "detect_language_from_class_tokens",
    "extract_code_blocks",
    "format_code_for_language",
    "get_rule",
    "normalize_code_language",
    "resolve_code_language",
]
