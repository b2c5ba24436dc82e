"""
Errors raised at the ACCS input boundary
"""

from typing import List, Optional


class InvalidInputError(ValueError):
    """Scoring inputs failed validation.

    Raised once, before any scoring work starts. `errors` lists the
    offending field paths in dotted form (e.g. "engagementMetrics.views").
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []
