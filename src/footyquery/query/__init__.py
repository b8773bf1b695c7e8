"""
Query pipeline for FootyQuery.

- `params` sanitizes raw request parameters.
- `filters` selects matching records.
- `pagination` orders and slices the result.
"""
