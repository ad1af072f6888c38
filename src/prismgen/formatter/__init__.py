# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical text rendering of parsed schemas."""

from prismgen.formatter.printer import format_attribute, format_schema, format_value

__all__ = ["format_schema", "format_value", "format_attribute"]
