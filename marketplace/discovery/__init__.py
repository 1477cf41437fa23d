"""
Discovery engine.

Responsibilities:
- Load professionals, establishments and reviews into immutable records.
- Join each subject with its distance from the query origin and its rating.
- Apply optional category / gender / tier / radius / rating filters.
- Order results on request and project them for API serialisation.
"""
