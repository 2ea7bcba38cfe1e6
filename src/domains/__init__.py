# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the school class service.

This package contains domain code that encapsulates business logic.

Domains:
    class_: Class lifecycle, schedule grid generation, deletion guard
        and read-only class views.
"""
