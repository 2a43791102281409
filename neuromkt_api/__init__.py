"""
Top-level package for the Neuromkt API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``neuromkt_api.app.main:app``.
"""

__all__ = []
