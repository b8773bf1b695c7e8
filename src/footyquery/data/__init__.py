"""
Data layer for FootyQuery.

Includes:
- The immutable match record model and field coercion (`schema`)
- Dataset loading (`data_loader`)
- CSV ingestion into the JSON dataset (`csv_import`)
"""
