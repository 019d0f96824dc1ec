"""
Top‑level package for the Model Store API.

This file makes ``model_store_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``model_store_api.app.main``.  Tests import the application through
this package, so the marker must stay even though it exports nothing.

All functionality lives in submodules under ``app``.
"""

__all__ = []
