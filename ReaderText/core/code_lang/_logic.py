# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""语言识别用到的底层判定函数"""

import json
import re
from typing import Any


def count_matches(code: str, pattern: re.Pattern[str]) -> int:
    """统计正则在文本中不重叠匹配的次数"""
    return sum(1 for _ in pattern.finditer(code))


def _reject_constant(name: str) -> Any:
    # NaN / Infinity 不是合法的 JSON
    msg = f"非法的 JSON 常量: {name}"
    raise ValueError(msg)


def parse_json(text: str) -> Any:
    """严格解析 JSON 文本

    Raises:
        ValueError: 文本不是合法的 JSON
        RecursionError: 嵌套层数过深

    """
    return json.loads(text, parse_constant=_reject_constant)


def looks_like_json(code: str) -> bool:
    """判断文本是否为以对象或数组为根的合法 JSON 文档"""
    trimmed = code.strip()
    if not trimmed or trimmed[0] not in "{[":
        return False

    try:
        parse_json(trimmed)
    except (ValueError, RecursionError):
        return False
    return True
