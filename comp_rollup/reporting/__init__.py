"""
Roster-level aggregation: budget status, level breakdown and the combined report.
"""
