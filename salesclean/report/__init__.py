"""
Read-only summaries of raw and cleaned sales data.
"""

from .quality_report import GroupStats, QualityReport, build_quality_report
from .raw_profile import RawProfile, profile_raw

__all__ = [
    "GroupStats",
    "QualityReport",
    "build_quality_report",
    "RawProfile",
    "profile_raw",
]
