"""Data models for dotstrap.

This module exports the core data structures used throughout the application.
"""

from dotstrap.models.history import RunRecord, StepRecord, create_run_record
from dotstrap.models.profile import (
    DotfilesConfig,
    PackagesConfig,
    Profile,
    SourcesConfig,
    Variant,
)
from dotstrap.models.step import StepResult, StepStatus

__all__ = [
    "DotfilesConfig",
    "PackagesConfig",
    "Profile",
    "RunRecord",
    "SourcesConfig",
    "StepRecord",
    "StepResult",
    "StepStatus",
    "Variant",
    "create_run_record",
]
