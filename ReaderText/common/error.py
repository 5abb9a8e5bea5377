# SPDX-FileCopyrightText: Copyright (C) 2024-2025 沉默の金 <cmzj@cmzj.org>
# SPDX-License-Identifier: GPL-3.0-only
"""异常定义"""


class ConfigError(ValueError):
    """配置文件存在但内容无法使用"""
