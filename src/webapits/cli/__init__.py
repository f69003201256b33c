# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for webapits."""
