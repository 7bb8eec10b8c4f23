from __future__ import annotations

from riddle_gate.api.routes.health import router as health_router
from riddle_gate.api.routes.puzzle import router as puzzle_router

__all__ = ["health_router", "puzzle_router"]
