# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""HTML 片段的解析、遍历与序列化"""

from collections.abc import Callable, Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
from bs4.formatter import HTMLFormatter

# 这些元素内的文本不是正文, 保持原样
SKIP_TEXT_NODE_TAGS = frozenset({"style", "script", "code", "pre", "textarea", "noscript"})


class SourceOrderFormatter(HTMLFormatter):
    """按解析时的顺序输出属性, void 元素输出为 `<br>` 而不是 `<br/>`"""

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml, void_element_close_prefix="")

    def attributes(self, tag: Tag) -> Iterable[tuple[str, str]]:
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


SOURCE_ORDER_FORMATTER = SourceOrderFormatter()


def parse_fragment(html: str) -> Tag:
    """按 HTML5 规则将片段解析到 body 中, 返回 body 元素

    使用 html5lib, 未闭合的 p/li 等元素按浏览器的方式补全, 纯空白文本不会被合并。
    显式的 `<body>` 保证片段开头的 style 等元素留在原位置, 不会被移入 head。
    class 等属性按原始字符串保存, 不拆分为列表。
    """
    soup = BeautifulSoup(f"<body>{html}", "html5lib", multi_valued_attributes=None)
    return soup.body


def serialize_fragment(root: Tag) -> str:
    """序列化 root 的所有子节点 (不含 root 本身)"""
    return root.decode_contents(formatter=SOURCE_ORDER_FORMATTER)


def is_text_node(node: PageElement) -> bool:
    """普通文本节点 (注释、CDATA、doctype 等不算)"""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def should_skip_text_node(node: PageElement) -> bool:
    """祖先中存在非正文元素时跳过"""
    return any(parent.name in SKIP_TEXT_NODE_TAGS for parent in node.parents)


def iter_text_nodes(root: Tag) -> Iterator[NavigableString]:
    """深度优先、从左到右遍历 root 下的所有文本节点, 每个节点只访问一次"""
    stack: list[PageElement] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Tag):
            stack.extend(reversed(node.contents))
        elif is_text_node(node):
            yield node


def convert_text_nodes(root: Tag, convert: Callable[[str], str]) -> int:
    """就地改写 root 下所有需要转换的文本节点, 返回被改写的节点数

    只改变文本内容, 元素结构、属性与注释保持不变。
    文本两端的空白随原始文本一起交给 convert, 不会被去除。
    """
    # 先收集再修改, 避免遍历过程中树结构变化
    targets = [node for node in iter_text_nodes(root) if node.strip() and not should_skip_text_node(node)]

    changed = 0
    for node in targets:
        original = str(node)
        converted = convert(original)
        if converted != original:
            node.replace_with(converted)
            changed += 1
    return changed
