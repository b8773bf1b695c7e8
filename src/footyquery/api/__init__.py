"""
Request handling for FootyQuery.

- `service` runs the query pipeline and assembles the result envelope.
- `main` exposes it over HTTP with FastAPI.
"""
