# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generate typed TypeScript clients from ASP.NET Web API metadata."""

__version__ = "0.1.0"
