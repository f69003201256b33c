# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run configuration for webapits."""

from webapits.config.settings import (
    CONFIG_FILE_NAME,
    Config,
    ConfigError,
    TypeMapping,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "TypeMapping",
    "load_config",
]
