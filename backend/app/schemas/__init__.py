"""
HealthTrack Backend — Pydantic Request/Response Schemas
========================================================

Schemas are separate from SQLAlchemy models: API contracts (camelCase ids,
joined owner name, optional request fields) change independently of the
database schema, and we control exactly what data is exposed.
"""
