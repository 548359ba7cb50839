"""
schema - Fixed value sets for contacts.

Public API:
    choices.INDUSTRIES / STATUSES / US_STATES / DATE_RANGES
    choices.as_dict()
"""

from schema.choices import (                         # noqa: F401
    INDUSTRIES,
    STATUSES,
    US_STATES,
    DATE_RANGES,
    DEFAULT_STATUS,
    as_dict,
)
