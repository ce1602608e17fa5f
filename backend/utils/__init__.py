"""
Utility functions
"""
from .datetime_utils import utcnow, format_display_date, FixedClock
from .id_generator import generate_id

__all__ = [
    'utcnow',
    'format_display_date',
    'FixedClock',
    'generate_id',
]
