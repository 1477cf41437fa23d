"""
Geo layer.

Responsibilities:
- Represent latitude/longitude pairs for subjects and query origins.
- Compute great-circle distances with the haversine formula.
"""
