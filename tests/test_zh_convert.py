# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
import pytest
from bs4 import ParserRejectedMarkup

from ReaderText.common.models import Entry
from ReaderText.core import zh_convert
from ReaderText.core.zh_convert import (
    ChineseConverter,
    ConversionMode,
    ConversionRule,
    ConverterCache,
    custom_rules_fingerprint,
    normalize_custom_rules,
)
from ReaderText.core.zh_convert.rules import apply_custom_rules


@pytest.fixture
def converter() -> ChineseConverter:
    return ChineseConverter()


# ------------纯文本------------------
def test_convert_text_s2tw(converter: ChineseConverter) -> None:
    assert converter.convert_text("汉语测试", ConversionMode.S2TW, []) == "漢語測試"


def test_convert_text_accepts_mode_string(converter: ChineseConverter) -> None:
    assert converter.convert_text("汉语测试", "s2tw", []) == "漢語測試"


def test_convert_text_t2s(converter: ChineseConverter) -> None:
    assert converter.convert_text("漢語測試", ConversionMode.T2S, []) == "汉语测试"


def test_convert_text_s2hk(converter: ChineseConverter) -> None:
    assert "漢" in converter.convert_text("汉语", ConversionMode.S2HK, [])


@pytest.mark.parametrize(
    ("mode", "text"),
    [
        (ConversionMode.S2TW, "汉语测试，软件与内存"),
        (ConversionMode.S2HK, "汉语测试，软件与内存"),
        (ConversionMode.T2S, "漢語測試，軟件與內存"),
    ],
)
def test_convert_text_fixed_point(converter: ChineseConverter, mode: ConversionMode, text: str) -> None:
    once = converter.convert_text(text, mode, [])
    assert once != text
    assert converter.convert_text(once, mode, []) == once


def test_convert_text_keeps_vocabulary(converter: ChineseConverter) -> None:
    # 只转换字形, 不替换地区用词
    assert converter.convert_text("软件", ConversionMode.S2TW, []) == "軟件"


def test_convert_text_applies_rules_after_conversion(converter: ChineseConverter) -> None:
    rules = [ConversionRule("開放", "开放")]
    assert converter.convert_text("开放中文", ConversionMode.S2TW, rules) == "开放中文"


def test_convert_text_accepts_mapping_rules(converter: ChineseConverter) -> None:
    rules = [{"from": "開放", "to": "开放"}]
    assert converter.convert_text("开放中文 from", ConversionMode.S2TW, rules) == "开放中文 from"


def test_convert_text_off_without_rules_is_identity(converter: ChineseConverter) -> None:
    text = "汉语 漢語"
    assert converter.convert_text(text, ConversionMode.OFF, []) is text


def test_convert_text_off_with_rules(converter: ChineseConverter) -> None:
    assert converter.convert_text("汉语", ConversionMode.OFF, [ConversionRule("汉语", "中文")]) == "中文"


def test_convert_text_unknown_mode_is_off(converter: ChineseConverter) -> None:
    assert converter.convert_text("汉语", "zh-bogus", []) == "汉语"


# ------------自定义规则------------------
def test_rules_apply_in_list_order() -> None:
    assert apply_custom_rules("a", [ConversionRule("a", "b"), ConversionRule("b", "c")]) == "c"
    assert apply_custom_rules("a", [ConversionRule("b", "c"), ConversionRule("a", "b")]) == "b"


def test_rules_replace_all_occurrences_literally() -> None:
    assert apply_custom_rules("a.b.a", [ConversionRule(".", "-"), ConversionRule("a", "x")]) == "x-b-x"


def test_rules_with_empty_from_are_skipped() -> None:
    assert apply_custom_rules("abc", [ConversionRule("", "x")]) == "abc"


def test_normalize_custom_rules() -> None:
    assert normalize_custom_rules([{"from": " 開放 ", "to": " 开放 "}]) == [ConversionRule("開放", "开放")]
    assert normalize_custom_rules([(" a", "b "), ConversionRule("c ", " d")]) == [
        ConversionRule("a", "b"),
        ConversionRule("c", "d"),
    ]
    assert normalize_custom_rules(None) == []
    assert normalize_custom_rules([{"from": None, "to": None}, {"from": "a"}]) == [
        ConversionRule("", ""),
        ConversionRule("a", ""),
    ]


def test_rules_in_mapping_form_are_applied_without_trimming() -> None:
    assert apply_custom_rules("汉语 from", [{"from": "汉", "to": None}]) == "语 from"
    assert apply_custom_rules("a b", [{"from": " ", "to": "_"}, ("a", "x")]) == "x_b"


def test_custom_rules_fingerprint() -> None:
    normalized = normalize_custom_rules([{"from": " 開放 ", "to": " 开放 "}])
    first = custom_rules_fingerprint(normalized)
    second = custom_rules_fingerprint([{"from": "開放", "to": "开放"}])
    assert first == second
    assert first == '[{"from":"開放","to":"开放"}]'
    assert custom_rules_fingerprint(None) == "[]"
    assert custom_rules_fingerprint([("a", "b"), ("c", "d")]) != custom_rules_fingerprint([("c", "d"), ("a", "b")])


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("s2tw", ConversionMode.S2TW),
        (" S2HK ", ConversionMode.S2HK),
        ("t2s", ConversionMode.T2S),
        (ConversionMode.T2S, ConversionMode.T2S),
        ("off", ConversionMode.OFF),
        ("zh-bogus", ConversionMode.OFF),
        ("", ConversionMode.OFF),
        (None, ConversionMode.OFF),
    ],
)
def test_conversion_mode_parse(raw: str | None, expected: ConversionMode) -> None:
    assert ConversionMode.parse(raw) == expected


# ------------缓存------------------
def test_converter_cache_builds_each_mode_once() -> None:
    built: list[ConversionMode] = []

    def builder(mode: ConversionMode):
        built.append(mode)
        return str.upper

    cache = ConverterCache(builder)
    assert cache.get(ConversionMode.OFF) is None
    first = cache.get(ConversionMode.S2TW)
    for _ in range(3):
        assert cache.get("s2tw") is first
    cache.get(ConversionMode.T2S)

    assert built == [ConversionMode.S2TW, ConversionMode.T2S]
    assert len(cache) == 2
    assert ConversionMode.S2TW in cache


def test_converter_shares_cache() -> None:
    cache = ConverterCache(lambda mode: str.upper)
    first = ChineseConverter(cache)
    second = ChineseConverter(cache)
    assert first.convert_text("abc", ConversionMode.S2TW, []) == "ABC"
    assert second.cache is first.cache
    assert len(cache) == 1


# ------------HTML------------------
def test_convert_html_preserves_style(converter: ChineseConverter) -> None:
    html = '<style>.title::before{content:"汉语"}</style><div class="title">汉语测试</div>'
    output = converter.convert_html(html, ConversionMode.S2TW, [])

    assert '<style>.title::before{content:"汉语"}</style>' in output
    assert '<div class="title">漢語測試</div>' in output


@pytest.mark.parametrize("tag", ["script", "code", "pre", "textarea", "noscript"])
def test_convert_html_skips_non_prose_elements(converter: ChineseConverter, tag: str) -> None:
    html = f"<{tag}>汉语</{tag}><p>汉语</p>"
    assert converter.convert_html(html, ConversionMode.S2TW, []) == f"<{tag}>汉语</{tag}><p>漢語</p>"


def test_convert_html_skips_nested_code(converter: ChineseConverter) -> None:
    html = "<pre><span><b>汉语</b></span></pre>"
    assert converter.convert_html(html, ConversionMode.S2TW, []) == html


def test_convert_html_keeps_attributes_and_comments(converter: ChineseConverter) -> None:
    html = '<p><a title="汉语" href="/汉语">汉语</a><!-- 汉语 --></p>'
    expected = '<p><a title="汉语" href="/汉语">漢語</a><!-- 汉语 --></p>'
    assert converter.convert_html(html, ConversionMode.S2TW, []) == expected


def test_convert_html_keeps_surrounding_whitespace(converter: ChineseConverter) -> None:
    html = "<div>\n  <p>  汉语  </p>\n</div>"
    assert converter.convert_html(html, ConversionMode.S2TW, []) == "<div>\n  <p>  漢語  </p>\n</div>"


def test_convert_html_keeps_attribute_values_verbatim(converter: ChineseConverter) -> None:
    html = '<p class="a   b" data-x="1"><input disabled value="汉语">汉语</p>'
    expected = '<p class="a   b" data-x="1"><input disabled="" value="汉语">漢語</p>'
    assert converter.convert_html(html, ConversionMode.S2TW, []) == expected


def test_convert_html_keeps_whitespace_inside_code(converter: ChineseConverter) -> None:
    code = "<code><span>a</span>\n    <span>b</span></code>"
    html = f"{code}\n\n<p>汉语</p>\n"
    assert converter.convert_html(html, ConversionMode.S2TW, []) == f"{code}\n\n<p>漢語</p>\n"


def test_convert_html_closes_elements_like_a_browser(converter: ChineseConverter) -> None:
    html = "<p>汉语<p>测试<li>一<li>二"
    expected = "<p>漢語</p><p>測試</p><li>一</li><li>二</li>"
    assert converter.convert_html(html, ConversionMode.S2TW, []) == expected


def test_convert_html_void_elements(converter: ChineseConverter) -> None:
    html = '<p>汉语<br>测试<img src="a.png" alt="图"></p>'
    expected = '<p>漢語<br>測試<img src="a.png" alt="图"></p>'
    assert converter.convert_html(html, ConversionMode.S2TW, []) == expected


def test_convert_html_accepts_mapping_rules(converter: ChineseConverter) -> None:
    html = "<p>开放中文 from</p>"
    output = converter.convert_html(html, ConversionMode.S2TW, [{"from": "開放", "to": "开放"}])
    assert output == "<p>开放中文 from</p>"


def test_convert_html_matches_convert_text(converter: ChineseConverter) -> None:
    rules = [ConversionRule("測試", "测验")]
    raw = " 汉语测试，开放中文 "
    output = converter.convert_html(f"<p>{raw}</p>", ConversionMode.S2TW, rules)
    assert output == f"<p>{converter.convert_text(raw, ConversionMode.S2TW, rules)}</p>"


def test_convert_html_rules_only(converter: ChineseConverter) -> None:
    html = "<p>汉语</p><code>汉语</code>"
    output = converter.convert_html(html, ConversionMode.OFF, [ConversionRule("汉语", "中文")])
    assert output == "<p>中文</p><code>汉语</code>"


def test_convert_html_fast_paths(converter: ChineseConverter) -> None:
    assert converter.convert_html("", ConversionMode.S2TW, []) == ""
    html = "<p>汉语<br></p>"
    assert converter.convert_html(html, ConversionMode.OFF, []) is html


def test_convert_html_unparseable(converter: ChineseConverter, monkeypatch: pytest.MonkeyPatch) -> None:
    def reject(*args, **kwargs):
        raise ParserRejectedMarkup("rejected")

    monkeypatch.setattr(zh_convert, "parse_fragment", reject)
    html = "<p>汉语</p>"
    assert converter.convert_html(html, ConversionMode.S2TW, []) is html


# ------------文章------------------
def _entry() -> Entry:
    return Entry(id=1, feed_id=2, title="汉语", url="https://example.com/1", content="<p>汉语</p><pre>汉语</pre>")


def test_convert_entry_off_returns_same_object(converter: ChineseConverter) -> None:
    entry = _entry()
    assert converter.convert_entry(entry, "off", []) is entry
    assert converter.convert_entry(entry, ConversionMode.OFF, None) is entry


def test_convert_entry(converter: ChineseConverter) -> None:
    entry = _entry()
    output = converter.convert_entry(entry, ConversionMode.S2TW, [{"from": " 漢語 ", "to": "中文"}])

    assert output is not entry
    assert output.title == "中文"
    assert output.content == "<p>中文</p><pre>汉语</pre>"
    assert output.id == entry.id
    assert output.url == entry.url
    # 原对象不变
    assert entry.title == "汉语"


def test_convert_entry_without_content(converter: ChineseConverter) -> None:
    entry = Entry(id=1, feed_id=2, title="汉语")
    output = converter.convert_entry(entry, ConversionMode.S2TW, [])
    assert output.title == "漢語"
    assert output.content is None
