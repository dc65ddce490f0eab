# src/esg_dashboard/core/placeholders.py
"""
Static values the dashboard shows next to computed figures.

None of these come from uploaded rows yet. Replacing one with a computed
value means dropping its key here and adding the field to the matching
dataclass in core.types.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

SOCIAL_PLACEHOLDERS: Mapping[str, Any] = MappingProxyType({
    "supplierDiversity": 3,
    "customerSatisfaction": 85,
    "humanCapital": 92,
})

GOVERNANCE_PLACEHOLDERS: Mapping[str, Any] = MappingProxyType({
    "corporateGovernance": "Compliant",
    "iso9001Compliance": "Yes",
    "businessEthics": "High",
})

# Extra keys only the social / governance pages read
SOCIAL_METRICS_PLACEHOLDERS: Mapping[str, Any] = MappingProxyType({
    "employeeEngagement": 70,
    "communityPrograms": 40,
})

GOVERNANCE_METRICS_PLACEHOLDERS: Mapping[str, Any] = MappingProxyType({
    "dataPrivacy": "Compliant",
})
