"""
Service layer abstraction.

The model store lives here.  Route handlers only see the abstract
``ModelStore`` contract, so the SQLite and in‑memory backends can be
swapped at startup without touching the API layer.
"""
