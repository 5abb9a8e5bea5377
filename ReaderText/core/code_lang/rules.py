# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""代码语言识别的规则库。

规则按顺序逐条判定, 第一条命中的规则决定结果。
语法特征越明确的规则越靠前 (合法 JSON、Rust 的 `::`、shebang),
花括号、冒号这类多种语言共有的特征放在后面。

所有模式都使用 re.ASCII, \w 与 \b 只按 ASCII 判断, 中文紧贴代码时 (如 `函数fn main()`) 仍能识别。
"""

import re

from ._logic import count_matches, looks_like_json
from .models import CodeLanguage, DetectRule

# --- Patterns ---
# Rust
RUST_KEYWORD_RE = re.compile(r"\b(use\s+\w|fn\s+\w+\s*\(|impl\s+\w+|pub\s+(struct|enum|fn)|let\s+mut\s+\w+)", re.M | re.A)
RUST_TYPED_LET_RE = re.compile(r"\blet\s+mut\s+\w+\s*:\s*[^=;]+=\s*", re.M | re.A)
RUST_PATH_RE = re.compile(r"\b[A-Za-z_]\w*::[A-Za-z_][\w:]*", re.M | re.A)

# JSX
JSX_COMPONENT_TAG_RE = re.compile(r"<[A-Z][A-Za-z0-9]*(\s[^>]*)?>", re.A)
JSX_FRAGMENT_RE = re.compile(r"<>[\s\S]*</>", re.A)
JSX_RETURN_RE = re.compile(r"\b(return|=>)\b", re.A)
JSX_CREATE_ELEMENT_RE = re.compile(r"\bReact\.createElement\b", re.A)
JSX_ELEMENT_RE = re.compile(r"<([A-Za-z][\w.-]*)(\s[^>]*)?>", re.A)
JSX_SELF_CLOSING_RE = re.compile(r"<([A-Za-z][\w.-]*)(\s[^>]*)?/>", re.A)

# TypeScript
TS_DECLARATION_RE = re.compile(r"\b(interface|type)\s+\w+", re.M | re.A)
TS_KEYWORD_RE = re.compile(r"\b(enum|implements|readonly)\b", re.M | re.A)
TS_ANNOTATION_RE = re.compile(r":\s*[A-Za-z_$][\w<>{}|,&? ]*(?=\s*[=),;])", re.M | re.A)
TS_CAST_RE = re.compile(r"\bas\s+[A-Za-z_$][\w<>{}|,&? ]*", re.M | re.A)

# Shell
SHEBANG_RE = re.compile(r"^#!.*\b(bash|sh|zsh)\b", re.M | re.A)
SHELL_EXPORT_RE = re.compile(r"^\s*export\s+[A-Za-z_][A-Za-z0-9_]*=", re.M | re.A)
SHELL_COMMAND_RE = re.compile(r"^\s*(cd|ls|pwd|cat|grep|find|curl|wget|chmod|chown|sudo)\b", re.M | re.A)

# 标记语言
XML_PROLOG_RE = re.compile(r"^\s*<\?xml\b", re.M | re.A)
HTML_OPEN_TAG_RE = re.compile(r"<[a-z][\w-]*(\s[^>]*)?>", re.I | re.A)
HTML_CLOSE_TAG_RE = re.compile(r"</[a-z][\w-]*>", re.I | re.A)
CSS_BLOCK_RE = re.compile(r"(^|\n)\s*[\w.#:\[\]-]+\s*\{[^}]*:[^}]*\}", re.M | re.A)

# 数据 / 查询
SQL_KEYWORD_RE = re.compile(
    r"\b(select|insert\s+into|update|delete\s+from|create\s+table|alter\s+table|drop\s+table)\b",
    re.I | re.A,
)
TOML_SECTION_RE = re.compile(r"^\s*\[[^\]]+\]\s*$", re.M | re.A)
TOML_ASSIGNMENT_RE = re.compile(r"^\s*[\w.-]+\s*=\s*.+$", re.M | re.A)
YAML_DOCUMENT_RE = re.compile(r"^---\s*$", re.M | re.A)
YAML_MAPPING_RE = re.compile(r"^\s*[\w-]+\s*:\s*.+$", re.M | re.A)
YAML_CODE_PUNCTUATION_RE = re.compile(r"[;{}()]", re.A)
YAML_CODE_KEYWORD_RE = re.compile(r"\b(function|class|const|let|var)\b", re.A)

# 编译型语言
GO_PACKAGE_RE = re.compile(r"^\s*package\s+main\b", re.M | re.A)
GO_FUNC_RE = re.compile(r"\bfunc\s+\w+\s*\([^)]*\)\s*\{", re.M | re.A)
CPP_INCLUDE_RE = re.compile(r"^\s*#include\s*[<\"]", re.M | re.A)
CPP_STD_RE = re.compile(r"\bstd::\w+", re.M | re.A)
CPP_MAIN_RE = re.compile(r"\bint\s+main\s*\(", re.M | re.A)
JAVA_IMPORT_RE = re.compile(r"^\s*import\s+\w+(\.\w+)*;?", re.M | re.A)
JAVA_TYPE_RE = re.compile(r"\b(class|interface|enum)\s+\w+", re.M | re.A)
JAVA_MAIN_RE = re.compile(r"\bpublic\s+static\s+void\s+main\s*\(", re.M | re.A)
KOTLIN_MAIN_RE = re.compile(r"\bfun\s+main\s*\(", re.M | re.A)
KOTLIN_DECLARATION_RE = re.compile(r"\b(data\s+class|val\s+\w+|var\s+\w+)\b", re.M | re.A)
SWIFT_IMPORT_RE = re.compile(r"^\s*import\s+(Foundation|UIKit|SwiftUI)\b", re.M | re.A)
SWIFT_DECLARATION_RE = re.compile(r"\b(func|struct|enum|protocol)\s+\w+\b", re.M | re.A)

# 脚本语言
PYTHON_IMPORT_RE = re.compile(r"^\s*(from\s+\w+\s+import\s+|import\s+\w+)", re.M | re.A)
PYTHON_DEF_RE = re.compile(r"^\s*(def|class)\s+\w+\s*\(?.*\)?:\s*$", re.M | re.A)
MARKDOWN_FENCE_RE = re.compile(r"^```[\w-]*\s*$", re.M | re.A)
MARKDOWN_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+\S+", re.M | re.A)
JS_KEYWORD_RE = re.compile(r"\b(function|const|let|var|return|async|await|console\.log)\b", re.M | re.A)


# --- Rule Functions ---
def has_rust_syntax(code: str) -> bool:
    return bool(RUST_KEYWORD_RE.search(code) or RUST_TYPED_LET_RE.search(code) or RUST_PATH_RE.search(code))


def has_jsx_syntax(code: str) -> bool:
    """判断是否包含 JSX 元素 (组件标签、Fragment, 或在 return/箭头函数中出现的标签)"""
    if JSX_COMPONENT_TAG_RE.search(code) or JSX_FRAGMENT_RE.search(code):
        return True
    returns_markup = JSX_RETURN_RE.search(code) or JSX_CREATE_ELEMENT_RE.search(code)
    has_element = JSX_ELEMENT_RE.search(code) or JSX_SELF_CLOSING_RE.search(code)
    return bool(returns_markup and has_element)


def has_typescript_syntax(code: str) -> bool:
    """判断是否包含 TypeScript 特有语法 (类型声明、类型标注、as 断言等)"""
    return bool(
        TS_DECLARATION_RE.search(code)
        or TS_KEYWORD_RE.search(code)
        or TS_ANNOTATION_RE.search(code)
        or TS_CAST_RE.search(code),
    )


def _detect_script_family(code: str) -> CodeLanguage | bool:
    """JSX 与 TypeScript 组合判定: 两者兼有为 tsx, 否则取其一"""
    jsx = has_jsx_syntax(code)
    typescript = has_typescript_syntax(code)
    if jsx and typescript:
        return CodeLanguage.TSX
    if jsx:
        return CodeLanguage.JSX
    if typescript:
        return CodeLanguage.TYPESCRIPT
    return False


def _is_shell_commands(code: str) -> bool:
    return count_matches(code, SHELL_EXPORT_RE) >= 1 or count_matches(code, SHELL_COMMAND_RE) >= 2


def _is_html(code: str) -> bool:
    return bool(HTML_OPEN_TAG_RE.search(code) and HTML_CLOSE_TAG_RE.search(code))


def _is_yaml(code: str) -> bool:
    if YAML_DOCUMENT_RE.search(code):
        return True
    return (
        count_matches(code, YAML_MAPPING_RE) >= 2
        and not YAML_CODE_PUNCTUATION_RE.search(code)
        and not YAML_CODE_KEYWORD_RE.search(code.lower())
    )


def _is_java(code: str) -> bool:
    # 三者缺一不可, 否则容易与 Kotlin / Python 的 import 混淆
    return bool(JAVA_IMPORT_RE.search(code) and JAVA_TYPE_RE.search(code) and JAVA_MAIN_RE.search(code))


def _any(*patterns: re.Pattern[str]):
    """生成 "任意一个正则命中即可" 的判定函数"""

    def predicate(code: str) -> bool:
        return any(pattern.search(code) for pattern in patterns)

    return predicate


# --- Final Rule Aggregation ---
ALL_RULES: tuple[DetectRule, ...] = (
    DetectRule(name="json_document", language=CodeLanguage.JSON, predicate=looks_like_json),
    # 必须早于 TypeScript 判定: Rust 的 `::` 与泛型语法会被误认为类型标注
    DetectRule(name="rust_syntax", language=CodeLanguage.RUST, predicate=has_rust_syntax),
    # 命中时由判定函数给出 tsx / jsx / typescript
    DetectRule(name="jsx_typescript", language=CodeLanguage.TYPESCRIPT, predicate=_detect_script_family),
    DetectRule(name="shell_shebang", language=CodeLanguage.BASH, predicate=_any(SHEBANG_RE)),
    DetectRule(name="shell_commands", language=CodeLanguage.BASH, predicate=_is_shell_commands),
    DetectRule(name="xml_prolog", language=CodeLanguage.XML, predicate=_any(XML_PROLOG_RE)),
    DetectRule(name="html_tags", language=CodeLanguage.HTML, predicate=_is_html),
    DetectRule(name="css_block", language=CodeLanguage.CSS, predicate=_any(CSS_BLOCK_RE)),
    DetectRule(name="sql_keywords", language=CodeLanguage.SQL, predicate=lambda code: bool(SQL_KEYWORD_RE.search(code.lower()))),
    DetectRule(name="toml_table", language=CodeLanguage.TOML, predicate=_any(TOML_SECTION_RE, TOML_ASSIGNMENT_RE)),
    DetectRule(name="yaml_mapping", language=CodeLanguage.YAML, predicate=_is_yaml),
    DetectRule(name="go_syntax", language=CodeLanguage.GO, predicate=_any(GO_PACKAGE_RE, GO_FUNC_RE)),
    DetectRule(name="cpp_syntax", language=CodeLanguage.CPP, predicate=_any(CPP_INCLUDE_RE, CPP_STD_RE, CPP_MAIN_RE)),
    DetectRule(name="java_program", language=CodeLanguage.JAVA, predicate=_is_java),
    DetectRule(name="kotlin_syntax", language=CodeLanguage.KOTLIN, predicate=_any(KOTLIN_MAIN_RE, KOTLIN_DECLARATION_RE)),
    DetectRule(name="swift_syntax", language=CodeLanguage.SWIFT, predicate=_any(SWIFT_IMPORT_RE, SWIFT_DECLARATION_RE)),
    DetectRule(name="python_syntax", language=CodeLanguage.PYTHON, predicate=_any(PYTHON_IMPORT_RE, PYTHON_DEF_RE)),
    DetectRule(name="markdown_structure", language=CodeLanguage.MARKDOWN, predicate=_any(MARKDOWN_FENCE_RE, MARKDOWN_HEADING_RE)),
    DetectRule(name="javascript_keywords", language=CodeLanguage.JAVASCRIPT, predicate=lambda code: bool(JS_KEYWORD_RE.search(code) or "=>" in code)),
)

_RULES_BY_NAME = {rule.name: rule for rule in ALL_RULES}


def get_rule(name: str) -> DetectRule:
    """按名称获取规则

    Raises:
        KeyError: 不存在该名称的规则

    """
    return _RULES_BY_NAME[name]
