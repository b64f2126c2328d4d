# severity.py
# -*- coding: utf-8 -*-
"""
Leak-type to severity classification.
"""

from models import CRITICAL, MODERATE, MINOR

LEAK_TYPE_SEVERITY = {
    "Burst Pipe": CRITICAL,
    "Moderate Leak": MODERATE,
    "Broken Valve": MODERATE,
    "Minor Leak": MINOR,
    "Small Leak": MINOR,
}

SEVERITY_COLORS = {
    CRITICAL: "#EF4444",
    MODERATE: "#FB923C",
    MINOR: "#0EA5E9",
}


def classify_severity(leak_type) -> str:
    """Map a leak-type label to Critical, Moderate or Minor.

    Unknown labels are treated as Minor so they are not filtered out by the
    default severity selection.
    """
    return LEAK_TYPE_SEVERITY.get(leak_type, MINOR)


def severity_color(severity) -> str:
    return SEVERITY_COLORS.get(severity, SEVERITY_COLORS[MINOR])
