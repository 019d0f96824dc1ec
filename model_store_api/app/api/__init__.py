"""
HTTP routing layer.

The package exposes a top‑level ``router`` (see ``router.py``) which
includes the endpoint modules under ``endpoints``.  The router is
mounted at the application root so that model routes live at
``/model``.
"""
