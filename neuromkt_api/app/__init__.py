"""
Application package.

The code is organised by layer: ``core`` (settings, logging, database
access, security, shared helpers), ``schemas`` (pydantic request and
response models), ``services`` (one class per entity family, each
method a single call into the ``neuromkt`` database schema) and
``api`` (versioned FastAPI routers).
"""
