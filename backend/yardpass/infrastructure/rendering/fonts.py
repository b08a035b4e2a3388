"""Font loading for the card renderer.

Each role tries the configured font directory first, then lets FreeType
search the system font folders, and finally falls back to Pillow's bundled
default font at the requested size.
"""

import asyncio
import logging
from pathlib import Path

from PIL import ImageFont

logger = logging.getLogger(__name__)

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont

# role → (logical size, candidate files)
FONT_ROLES: dict[str, tuple[int, tuple[str, ...]]] = {
    "title": (52, ("DejaVuSerif-BoldItalic.ttf", "georgiaz.ttf", "Georgia Bold Italic.ttf")),
    "label": (24, ("DejaVuSerif.ttf", "georgia.ttf", "Georgia.ttf")),
    "value": (22, ("DejaVuSerif-Bold.ttf", "georgiab.ttf", "Georgia Bold.ttf")),
    "message": (18, ("DejaVuSerif-Italic.ttf", "georgiai.ttf", "Georgia Italic.ttf")),
    "contact": (18, ("DejaVuSans.ttf", "arial.ttf", "Arial.ttf")),
    "mono": (10, ("DejaVuSansMono.ttf", "cour.ttf", "Courier New.ttf")),
}


class FontBook:
    """Loads every card font once, off the event loop."""

    def __init__(self, font_dir: str = "", scale: int = 2):
        self._font_dir = Path(font_dir) if font_dir else None
        self._scale = scale
        self._fonts: dict[str, FontType] | None = None

    async def ready(self) -> dict[str, FontType]:
        if self._fonts is None:
            self._fonts = await asyncio.to_thread(self._load_all)
        return self._fonts

    def _load_all(self) -> dict[str, FontType]:
        return {
            role: self._load(role, size * self._scale, candidates)
            for role, (size, candidates) in FONT_ROLES.items()
        }

    def _load(self, role: str, size: int, candidates: tuple[str, ...]) -> FontType:
        search: list[str] = []
        if self._font_dir is not None:
            search.extend(str(self._font_dir / name) for name in candidates)
        search.extend(candidates)

        for path in search:
            try:
                font = ImageFont.truetype(path, size)
            except OSError:
                continue
            logger.debug("Loaded %s font: %s", role, path)
            return font

        logger.warning("No TrueType font found for %s, using Pillow's default", role)
        return ImageFont.load_default(size=size)
