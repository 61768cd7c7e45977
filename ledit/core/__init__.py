"""
Core highlighting logic, independent of any UI toolkit.
"""

from ledit.core.models import (
    ClaimedRange,
    Language,
    Role,
    TokenSpan,
)
from ledit.core.syntax import (
    classify,
    run_passes,
)

__all__ = [
    # Models
    'ClaimedRange',
    'Language',
    'Role',
    'TokenSpan',
    # Engine
    'classify',
    'run_passes',
]
