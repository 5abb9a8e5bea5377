# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""自定义替换规则的归一化、指纹与应用"""

import json
from collections.abc import Iterable, Mapping, Sequence

from .models import ConversionRule

RuleLike = ConversionRule | Mapping[str, str] | Sequence[str]


def _to_rule(rule: RuleLike) -> ConversionRule:
    if isinstance(rule, ConversionRule):
        return rule
    if isinstance(rule, Mapping):
        # 配置文件中保存的格式为 {"from": ..., "to": ...}, 缺失或为 null 时视为空字符串
        return ConversionRule(str(rule.get("from") or ""), str(rule.get("to") or ""))
    frm, to = rule
    return ConversionRule(str(frm or ""), str(to or ""))


def normalize_custom_rules(rules: Iterable[RuleLike] | None) -> list[ConversionRule]:
    """去除每条规则 from/to 两端的空白, 保持原有顺序"""
    if not rules:
        return []
    normalized = []
    for rule in rules:
        frm, to = _to_rule(rule)
        normalized.append(ConversionRule(frm.strip(), to.strip()))
    return normalized


def custom_rules_fingerprint(rules: Iterable[RuleLike] | None) -> str:
    """生成规则列表的指纹, 归一化后相同的规则列表得到相同的指纹, 供调用方作为缓存键"""
    return json.dumps(
        [rule.to_dict() for rule in normalize_custom_rules(rules)],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def apply_custom_rules(text: str, rules: Iterable[RuleLike]) -> str:
    """按列表顺序逐条进行全局字面量替换

    规则可以是 ConversionRule、{"from", "to"} 映射或 (from, to) 序列, 这里不会去除空白。
    规则之间可能相互影响 (前一条的替换结果可能被后一条再次替换), 结果依赖规则顺序。
    from 为空的规则会被跳过。
    """
    output = text
    for rule in rules:
        frm, to = _to_rule(rule)
        if not frm:
            continue
        output = output.replace(frm, to)
    return output
