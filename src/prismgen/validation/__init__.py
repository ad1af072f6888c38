# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Strict cross-reference checks for parsed schemas."""

from prismgen.validation.checks import CheckError, CheckResult, CheckWarning, check

__all__ = ["check", "CheckError", "CheckResult", "CheckWarning"]
