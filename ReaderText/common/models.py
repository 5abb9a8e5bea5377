# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""通用数据模型"""

from dataclasses import dataclass, field


@dataclass(slots=True)
class Entry:
    """订阅源中的一篇文章

    只有 title 与 content 会被文本处理流程改写, 其余字段原样保留。
    """

    id: int
    feed_id: int
    title: str
    url: str = ""
    content: str | None = None  # HTML
    user_id: int = 0
    hash: str = ""
    status: str = "unread"
    author: str | None = None
    comments_url: str | None = None
    published_at: str = ""
    created_at: str | None = None
    changed_at: str | None = None
    starred: bool = False
    reading_time: int = 0
    tags: list[str] = field(default_factory=list)
