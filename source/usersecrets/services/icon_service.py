"""Window icon drawn at runtime with Pillow (a key over a rounded tile)."""

import importlib
import logging
from typing import Any, Optional

_LOG = logging.getLogger(__name__)


def _icon_colors(theme_variant: str) -> dict[str, tuple[int, int, int, int]]:
    if str(theme_variant).upper() == "LIGHT":
        return {
            "tile": (47, 111, 176, 255),
            "edge": (23, 64, 109, 255),
            "key": (255, 255, 255, 255),
        }
    return {
        "tile": (27, 77, 115, 255),
        "edge": (103, 180, 228, 255),
        "key": (233, 242, 250, 255),
    }


def build_icon_image(size: int = 64, theme_variant: str = "DARK", importlib_module: Any = importlib) -> Any:
    """Return an RGBA PIL image of the app icon at `size` x `size` pixels."""
    image_module = importlib_module.import_module("PIL.Image")
    draw_module = importlib_module.import_module("PIL.ImageDraw")
    size = max(16, int(size))
    # Draw at 4x and downsample for anti-aliased edges.
    scale = 4
    full = size * scale
    colors = _icon_colors(theme_variant)
    canvas = image_module.new("RGBA", (full, full), (0, 0, 0, 0))
    draw = draw_module.Draw(canvas)
    draw.rounded_rectangle(
        (0, 0, full - 1, full - 1),
        radius=full // 5,
        fill=colors["tile"],
        outline=colors["edge"],
        width=max(1, scale * 2),
    )
    ring_r = full // 6
    cx, cy = full * 3 // 10 + ring_r // 2, full // 2
    draw.ellipse((cx - ring_r, cy - ring_r, cx + ring_r, cy + ring_r), outline=colors["key"], width=full // 14)
    shaft_h = full // 14
    shaft_end = full * 17 // 20
    draw.rectangle((cx + ring_r, cy - shaft_h // 2, shaft_end, cy + shaft_h // 2), fill=colors["key"])
    for tooth_x in (shaft_end - full // 9, shaft_end - full // 30):
        draw.rectangle((tooth_x, cy, tooth_x + full // 22, cy + full // 8), fill=colors["key"])
    return canvas.resize((size, size), image_module.LANCZOS)


def build_icon_photo(size: int = 64, theme_variant: str = "DARK", importlib_module: Any = importlib) -> Optional[Any]:
    """Return a Tk PhotoImage for the icon, or None when Pillow/Tk cannot provide one."""
    try:
        image = build_icon_image(size, theme_variant, importlib_module=importlib_module)
        image_tk_module = importlib_module.import_module("PIL.ImageTk")
        return image_tk_module.PhotoImage(image)
    except Exception as exc:
        # No display, or Pillow built without Tk support.
        _LOG.debug("icon.build_failed", exc_info=exc)
        return None
