# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""数据模型定义模块"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class CodeLanguage(str, Enum):
    """可用于语法高亮的语言标签, TEXT 为兜底值"""

    BASH = "bash"
    CSS = "css"
    CPP = "cpp"
    GO = "go"
    HTML = "html"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    JSON = "json"
    JSX = "jsx"
    KOTLIN = "kotlin"
    MARKDOWN = "markdown"
    PYTHON = "python"
    RUST = "rust"
    SQL = "sql"
    SWIFT = "swift"
    TOML = "toml"
    TSX = "tsx"
    TYPESCRIPT = "typescript"
    XML = "xml"
    YAML = "yaml"
    TEXT = "text"

    def __str__(self) -> str:
        return self.value


# 手动选择语言时提供的选项 (顺序即展示顺序)
CODE_LANGUAGE_OPTIONS: tuple[CodeLanguage, ...] = (
    CodeLanguage.TEXT,
    CodeLanguage.JAVASCRIPT,
    CodeLanguage.TYPESCRIPT,
    CodeLanguage.TSX,
    CodeLanguage.JSX,
    CodeLanguage.JSON,
    CodeLanguage.GO,
    CodeLanguage.CPP,
    CodeLanguage.HTML,
    CodeLanguage.CSS,
    CodeLanguage.BASH,
    CodeLanguage.PYTHON,
    CodeLanguage.RUST,
    CodeLanguage.JAVA,
    CodeLanguage.KOTLIN,
    CodeLanguage.SWIFT,
    CodeLanguage.SQL,
    CodeLanguage.YAML,
    CodeLanguage.TOML,
    CodeLanguage.MARKDOWN,
)


@dataclass(frozen=True, slots=True)
class DetectRule:
    """定义一条语言识别规则。"""

    name: str  # 规则的唯一名称, 便于调试与单独测试, 例如 "rust_syntax"
    language: CodeLanguage  # 判定命中时返回的语言
    # 判定函数, 参数为已去除首尾空白的代码文本。
    # 少数规则 (如 jsx/tsx) 命中后需要进一步决定语言, 此时返回 CodeLanguage 而不是 bool。
    predicate: Callable[[str], bool | CodeLanguage]

    def match(self, code: str) -> CodeLanguage | None:
        result = self.predicate(code)
        if isinstance(result, CodeLanguage):
            return result
        return self.language if result else None


class CodeBlock(NamedTuple):
    """HTML 中的一个代码块"""

    code: str
    language: CodeLanguage
