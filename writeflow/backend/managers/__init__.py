"""Data access managers for the WriteFlow Studio backend.

Each module provides async functions that encapsulate CRUD operations
and business logic.  Managers accept ``AsyncSession`` as a parameter,
return pydantic copies of the rows they touch (never live ORM objects),
and raise domain exceptions (``LookupError``, ``ValueError``), never
HTTP exceptions -- that translation is the router's responsibility.
"""
