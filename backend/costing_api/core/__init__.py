"""
Application wiring: lifespan and exception handlers.
"""

from costing_api.core.errors import register_exception_handlers
from costing_api.core.lifespan import lifespan

__all__ = [
    "lifespan",
    "register_exception_handlers",
]
