# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Code emission: the block tree and the TypeScript document emitters."""

from webapits.emit.block import Block
from webapits.emit.documents import Document, OutputError, emit_enums, emit_interfaces, write_documents
from webapits.emit.endpoints import IENDPOINT, EndpointsEmitter
from webapits.emit.service import SERVICE_CLASS, ServiceEmitter

__all__ = [
    "Block",
    "Document",
    "EndpointsEmitter",
    "IENDPOINT",
    "OutputError",
    "SERVICE_CLASS",
    "ServiceEmitter",
    "emit_enums",
    "emit_interfaces",
    "write_documents",
]
