"""
Cross-cutting infrastructure: settings, logging, database access,
authentication and input normalization.
"""
