"""Legal compliance: catalog lookups, document diffing and remediation tracking."""

from .cache import ComparisonCache, InMemoryComparisonCache
from .catalog import ComplianceCatalog
from .comparator import ComplianceComparator, build_comparison
from .remediation import RemediationTracker

__all__ = [
    "ComparisonCache",
    "ComplianceCatalog",
    "ComplianceComparator",
    "InMemoryComparisonCache",
    "RemediationTracker",
    "build_comparison",
]
