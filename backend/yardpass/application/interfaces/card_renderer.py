"""Abstract interface (port) for painting a pass card to a raster image."""

import base64
from abc import ABC, abstractmethod

from yardpass.domain.entities import PassCard

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def png_to_data_url(png: bytes) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")


_IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF8", "image/gif"),
)


def image_to_data_url(data: bytes) -> str:
    """Wrap raw image bytes in a data URL, sniffing the MIME type from the header."""
    mime = "application/octet-stream"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        mime = "image/webp"
    for signature, candidate in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            mime = candidate
            break
    return f"data:{mime};base64," + base64.b64encode(data).decode("ascii")


def data_url_to_bytes(data_url: str) -> bytes:
    """Decode a ``data:<mime>;base64,<payload>`` URL (or bare base64)."""
    _, _, payload = data_url.rpartition(",")
    return base64.b64decode(payload, validate=False)


class CardRenderer(ABC):
    """Port for card rendering — implemented in the infrastructure layer."""

    @abstractmethod
    async def render_png(self, card: PassCard, locked: bool) -> bytes:
        """Render ``card`` and return PNG bytes.

        When ``locked`` is True the card must not reveal any personal value.
        Identical inputs produce identical bytes.
        """
        ...
