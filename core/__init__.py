"""Core (UI-agnostic) insights dashboard logic.

This package contains:
- data loading (HTTP / MongoDB -> pandas) and record normalization
- filter normalization and initial-year seeding
- aggregation primitives (per year / sector / region)
- page compute functions (JSON-serializable payloads)
- chart helpers (series dicts + Altair -> Vega-Lite spec dict)
"""
