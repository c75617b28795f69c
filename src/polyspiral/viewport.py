"""Letterboxed scaling of the logical drawing area into the available window."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Viewport:
    """Uniform scale plus the resulting pixel size of the surface."""
    scale: float
    width: int
    height: int


def fit_scale(available_width: float, available_height: float, base_width: float, base_height: float) -> Viewport:
    """Largest uniform scale that fits base_width x base_height into the available area.

    The binding dimension decides: scale = min(aw / bw, ah / bh). The other
    dimension is letterboxed.
    """
    if available_width <= 0 or available_height <= 0:
        raise ValueError(f"available size must be positive, got {available_width}x{available_height}")
    if base_width <= 0 or base_height <= 0:
        raise ValueError(f"base size must be positive, got {base_width}x{base_height}")

    scale = min(available_width / base_width, available_height / base_height)
    return Viewport(
        scale=scale,
        width=max(1, int(round(base_width * scale))),
        height=max(1, int(round(base_height * scale))),
    )
