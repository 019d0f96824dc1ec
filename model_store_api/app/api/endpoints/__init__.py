"""
Endpoint modules.

Each module defines an APIRouter for one concern (model records,
health).  The routers are aggregated in ``api/router.py``.
"""
