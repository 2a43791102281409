"""
Pydantic schema definitions for API payloads.

Each domain (projects, catalogs, participants, tests, results, users)
defines its own request and response models.  Attribute names are
English; the services map them from the Spanish column names used by
the ``neuromkt`` database schema.
"""
