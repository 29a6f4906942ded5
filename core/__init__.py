"""Core (UI-agnostic) test-metrics dashboard logic.

This package contains:
- data loading (XLSX first sheet -> list of records)
- quarter table and filter normalization
- chart-data derivation (quarter/month grouping, series floor)
- chart helpers (Altair -> Vega-Lite spec dict)
- view state for the Streamlit page (fetch + derive)
"""
