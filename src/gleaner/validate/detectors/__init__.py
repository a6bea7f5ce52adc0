"""Detectors used to filter sources before acquisition."""

from gleaner.validate.detectors.duplicates import DuplicateDetector

__all__ = [
    "DuplicateDetector",
]
