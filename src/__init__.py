"""School Class Service Backend.

REST backend managing the lifecycle of school classes and the weekly
schedule grid generated for each of them.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
