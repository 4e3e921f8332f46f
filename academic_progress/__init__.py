"""Academic Progress Service.

Records and retrieves the academic progress of students, grouped by
curriculum level, for a multi-tenant academic platform.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
