"""Rotas HTTP: health e webhooks de callback SMS.

Agregação em router.py.
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
