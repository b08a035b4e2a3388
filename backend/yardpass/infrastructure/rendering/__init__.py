from .fonts import FontBook
from .layout import SCALE, VALUE_REGIONS
from .pillow_card_renderer import PillowCardRenderer, decode_photo, placeholder_scene

__all__ = [
    "FontBook",
    "SCALE",
    "VALUE_REGIONS",
    "PillowCardRenderer",
    "decode_photo",
    "placeholder_scene",
]
