"""Drawing surfaces - Pillow for real output, recording for tests and diagnostics."""

from .base import BLACK, WHITE, DrawingSurface
from .recording import RecordingSurface

DEFAULT_BACKEND = "pil"


def get_surface(backend: str = DEFAULT_BACKEND, width: int = 1, height: int = 1, **kwargs) -> DrawingSurface:
    """Get a drawing surface backend ("pil" or "recording")."""
    if backend == "recording":
        return RecordingSurface(width, height)

    from .pil import PilSurface
    return PilSurface(width, height, **kwargs)


__all__ = ["DrawingSurface", "RecordingSurface", "get_surface", "BLACK", "WHITE"]
