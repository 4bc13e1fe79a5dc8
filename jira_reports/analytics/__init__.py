"""Issue classification, release-label annotation, and blocking-status scans."""

from .annotate import ReleaseAnnotator, annotate, is_emphasized
from .blocking import BlockingStatusResolver, classify_links
from .classify import Classification, build_sprint_data, classify, merge_sprint_data

__all__ = [
    "BlockingStatusResolver",
    "Classification",
    "ReleaseAnnotator",
    "annotate",
    "build_sprint_data",
    "classify",
    "classify_links",
    "is_emphasized",
    "merge_sprint_data",
]
