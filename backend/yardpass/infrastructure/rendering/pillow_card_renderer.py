"""Pillow implementation of the CardRenderer port — paints the Yard Pass card.

Draw order: background, star border, photo frame, title, field rows,
contact lines, closing message, stamp, dashed rule, member mark.
Values and contact lines are painted only on an unlocked card; everything
else is identical between the two.
"""

import asyncio
import io
import logging
import math

from PIL import Image, ImageDraw, ImageFilter, ImageOps

from yardpass.application.interfaces import CardRenderer, data_url_to_bytes
from yardpass.config import Settings
from yardpass.domain.entities import PassCard
from yardpass.domain.masking import mask_email, mask_phone
from yardpass.domain.member_mark import member_mark_grid
from yardpass.infrastructure.rendering import layout as L
from yardpass.infrastructure.rendering.fonts import FontBook, FontType

logger = logging.getLogger(__name__)

ELLIPSIS = "…"


def _px(value: float) -> int:
    return round(value * L.SCALE)


def _fit_text(draw: ImageDraw.ImageDraw, text: str, font: FontType, max_width: int) -> str:
    """Trim ``text`` with an ellipsis until it fits in ``max_width`` pixels."""
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + ELLIPSIS, font=font) > max_width:
        text = text[:-1]
    return text.rstrip() + ELLIPSIS


def _star_points(cx: float, cy: float, outer: float, inner: float) -> list[tuple[float, float]]:
    points = []
    for i in range(10):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / 5
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points


def _quad_curve(p0, p1, p2, steps: int = 32) -> list[tuple[float, float]]:
    points = []
    for i in range(1, steps + 1):
        t = i / steps
        x = (1 - t) ** 2 * p0[0] + 2 * (1 - t) * t * p1[0] + t**2 * p2[0]
        y = (1 - t) ** 2 * p0[1] + 2 * (1 - t) * t * p1[1] + t**2 * p2[1]
        points.append((x, y))
    return points


def _vertical_gradient(size: tuple[int, int], top: str, bottom: str) -> Image.Image:
    width, height = size
    start = Image.new("RGB", (1, 1), top).getpixel((0, 0))
    end = Image.new("RGB", (1, 1), bottom).getpixel((0, 0))
    gradient = Image.new("RGB", size)
    draw = ImageDraw.Draw(gradient)
    for y in range(height):
        t = y / max(1, height - 1)
        color = tuple(round(a + (b - a) * t) for a, b in zip(start, end))
        draw.line([(0, y), (width, y)], fill=color)
    return gradient


def _fill_with_gradient(
    image: Image.Image, polygon: list[tuple[float, float]], y0: int, top: str, bottom: str
) -> None:
    mask = Image.new("L", image.size, 0)
    ImageDraw.Draw(mask).polygon(polygon, fill=255)
    gradient = Image.new("RGB", image.size, top)
    gradient.paste(_vertical_gradient((image.width, image.height - y0), top, bottom), (0, y0))
    image.paste(gradient, (0, 0), mask)


def placeholder_scene(width: int, height: int) -> Image.Image:
    """Sky, clouds and two hills, drawn when there is no usable photo."""
    w, h = width, height
    scene = Image.new("RGB", (w, h), L.FRAME_FILL)
    sky_h = int(h * 0.6)
    scene.paste(_vertical_gradient((w, sky_h), "#87CEEB", "#B0E0E6"), (0, 0))

    draw = ImageDraw.Draw(scene)
    for cx, cy, rx, ry in ((0.5, 0.30, 50, 25), (0.4, 0.32, 35, 20), (0.6, 0.32, 40, 22)):
        x, y = w * cx, h * cy
        draw.ellipse([x - _px(rx), y - _px(ry), x + _px(rx), y + _px(ry)], fill="#FFFFFF")

    back_hill = [(0, h)]
    back_hill += _quad_curve((0, h), (w * 0.3, h * 0.4), (w * 0.6, h * 0.65))
    back_hill += _quad_curve((w * 0.6, h * 0.65), (w * 0.8, h * 0.55), (w, h * 0.7))
    back_hill.append((w, h))
    _fill_with_gradient(scene, back_hill, int(h * 0.5), "#7CB342", "#558B2F")

    front_hill = [(0, h * 0.75)]
    front_hill += _quad_curve((0, h * 0.75), (w * 0.4, h * 0.6), (w, h * 0.85))
    front_hill += [(w, h), (0, h)]
    _fill_with_gradient(scene, front_hill, int(h * 0.7), "#8BC34A", "#689F38")
    return scene


def decode_photo(photo: bytes | str, size: tuple[int, int]) -> Image.Image | None:
    """Decode a photo and cover-crop it to ``size``; None if it cannot be read."""
    try:
        data = data_url_to_bytes(photo) if isinstance(photo, str) else photo
        with Image.open(io.BytesIO(data)) as source:
            source.load()
            image = ImageOps.exif_transpose(source).convert("RGB")
        return ImageOps.fit(image, size, method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug("Photo decode failed, drawing placeholder: %s", exc)
        return None


class PillowCardRenderer(CardRenderer):
    """Implements the CardRenderer port with Pillow."""

    def __init__(self, fonts: FontBook | None = None):
        self._fonts = fonts or FontBook(scale=L.SCALE)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PillowCardRenderer":
        return cls(FontBook(font_dir=settings.card_font_dir, scale=L.SCALE))

    @property
    def inner_photo_size(self) -> tuple[int, int]:
        inset = 2 * L.PHOTO_INSET
        return _px(L.PHOTO_W - inset), _px(L.PHOTO_H - inset)

    async def render(self, card: PassCard, locked: bool) -> Image.Image:
        fonts = await self._fonts.ready()
        photo = None
        if card.photo:
            photo = await asyncio.to_thread(decode_photo, card.photo, self.inner_photo_size)
        return self._paint(card, locked, fonts, photo)

    async def render_png(self, card: PassCard, locked: bool) -> bytes:
        image = await self.render(card, locked)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        logger.debug("Rendered %s card %s (%d bytes)", "locked" if locked else "unlocked", card.id, buffer.tell())
        return buffer.getvalue()

    # ── painting ─────────────────────────────────────────────────────

    def _paint(
        self, card: PassCard, locked: bool, fonts: dict[str, FontType], photo: Image.Image | None
    ) -> Image.Image:
        canvas = Image.new("RGBA", (_px(L.CARD_WIDTH), _px(L.CARD_HEIGHT)), L.BACKGROUND)
        draw = ImageDraw.Draw(canvas)

        self._draw_star_border(draw)
        self._draw_photo_frame(canvas, draw, photo)
        self._draw_title(draw, card, fonts)
        self._draw_fields(draw, card, fonts, locked)
        if not locked:
            self._draw_contact(draw, card, fonts)
        self._draw_message(draw, card, fonts)
        self._draw_stamp(canvas)
        self._draw_rule(draw)
        self._draw_member_mark(draw, card, fonts)
        return canvas.convert("RGB")

    @staticmethod
    def _draw_star_border(draw: ImageDraw.ImageDraw) -> None:
        w, h, m, step = L.CARD_WIDTH, L.CARD_HEIGHT, L.STAR_MARGIN, L.STAR_SPACING

        def star(cx: float, cy: float, color: str) -> None:
            points = _star_points(_px(cx), _px(cy), _px(L.STAR_OUTER_R), _px(L.STAR_INNER_R))
            draw.polygon(points, fill=color)

        for x in range(m, w - m, step):
            star(x, m, L.STAR_COLOR)
            accent = abs(x - w / 2) < step / 2
            star(x, h - m, L.STAR_ACCENT if accent else L.STAR_COLOR)
        for y in range(m + step, h - m, step):
            star(m, y, L.STAR_COLOR)
            star(w - m, y, L.STAR_COLOR)

    def _draw_photo_frame(
        self, canvas: Image.Image, draw: ImageDraw.ImageDraw, photo: Image.Image | None
    ) -> None:
        x, y = _px(L.PHOTO_X), _px(L.PHOTO_Y)
        fw, fh = _px(L.PHOTO_W), _px(L.PHOTO_H)

        pad = _px(L.SHADOW_BLUR * 2)
        shadow = Image.new("RGBA", (fw + 2 * pad, fh + 2 * pad), (0, 0, 0, 0))
        ImageDraw.Draw(shadow).rectangle([pad, pad, pad + fw, pad + fh], fill=(0, 0, 0, L.SHADOW_ALPHA))
        shadow = shadow.filter(ImageFilter.GaussianBlur(_px(L.SHADOW_BLUR) / 2))
        offset = _px(L.SHADOW_OFFSET)
        canvas.alpha_composite(shadow, dest=(x - pad + offset, y - pad + offset))

        draw.rectangle([x, y, x + fw, y + fh], fill=L.FRAME_FILL, outline=L.FRAME_BORDER, width=_px(3))

        inset = _px(L.PHOTO_INSET)
        inner = self.inner_photo_size
        picture = photo if photo is not None else placeholder_scene(*inner)
        canvas.paste(picture, (x + inset, y + inset))
        draw.rectangle(
            [x + inset, y + inset, x + inset + inner[0], y + inset + inner[1]],
            outline=L.INNER_BORDER,
            width=_px(1),
        )

    @staticmethod
    def _draw_title(draw: ImageDraw.ImageDraw, card: PassCard, fonts: dict[str, FontType]) -> None:
        for (x, y), text in ((L.TITLE_LINE1, "YARDEN'S"), (L.TITLE_LINE2, card.gender.house)):
            draw.text((_px(x), _px(y)), text, font=fonts["title"], fill=L.TITLE_COLOR, anchor="ls")

    @staticmethod
    def _draw_fields(
        draw: ImageDraw.ImageDraw, card: PassCard, fonts: dict[str, FontType], locked: bool
    ) -> None:
        values = (card.name, str(card.year_joined), card.gender.status)
        max_width = _px(L.LEADER_END_X - L.VALUE_X)
        dot = _px(1.2)
        for (label, baseline), value in zip(L.FIELD_ROWS, values):
            draw.text((_px(L.CONTENT_X), _px(baseline)), label, font=fonts["label"], fill=L.LABEL_COLOR, anchor="ls")
            for x in range(L.LEADER_START_X, L.LEADER_END_X, L.LEADER_STEP):
                cx, cy = _px(x + 3), _px(baseline - 3)
                draw.ellipse([cx - dot, cy - dot, cx + dot, cy + dot], fill=L.LEADER_COLOR)
            if not locked:
                text = _fit_text(draw, value, fonts["value"], max_width)
                draw.text((_px(L.VALUE_X), _px(baseline)), text, font=fonts["value"], fill=L.VALUE_COLOR, anchor="ls")

    @staticmethod
    def _draw_contact(draw: ImageDraw.ImageDraw, card: PassCard, fonts: dict[str, FontType]) -> None:
        lines = (mask_email(card.email), mask_phone(card.phone), card.created_label)
        max_width = _px(L.CONTACT_MAX_WIDTH)
        for baseline, line in zip(L.CONTACT_BASELINES, lines):
            text = _fit_text(draw, line, fonts["contact"], max_width)
            draw.text((_px(L.CONTACT_X), _px(baseline)), text, font=fonts["contact"], fill=L.CONTACT_COLOR, anchor="ls")

    @staticmethod
    def _draw_message(draw: ImageDraw.ImageDraw, card: PassCard, fonts: dict[str, FontType]) -> None:
        for baseline, line in zip(L.MESSAGE_BASELINES, (card.gender.closing_line, L.MESSAGE_TAIL)):
            draw.text((_px(L.CONTENT_X), _px(baseline)), line, font=fonts["message"], fill=L.MESSAGE_COLOR, anchor="ls")

    @staticmethod
    def _draw_stamp(canvas: Image.Image) -> None:
        half = _px(L.STAMP_RINGS[0] + 5)
        layer = Image.new("RGBA", (2 * half, 2 * half), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        color = (*L.STAMP_COLOR, round(255 * L.STAMP_OPACITY))
        c = half

        for radius in L.STAMP_RINGS:
            r = _px(radius)
            draw.ellipse([c - r, c - r, c + r, c + r], outline=color, width=_px(2))

        inner_r, outer_r = (_px(r) for r in L.STAMP_TICK_RADII)
        for i in range(L.STAMP_TICKS):
            angle = math.radians(i * 360 / L.STAMP_TICKS)
            cos, sin = math.cos(angle), math.sin(angle)
            draw.line(
                [(c + cos * inner_r, c + sin * inner_r), (c + cos * outer_r, c + sin * outer_r)],
                fill=color,
                width=_px(1),
            )

        heart = []
        size = _px(0.75)
        for i in range(64):
            t = 2 * math.pi * i / 64
            hx = 16 * math.sin(t) ** 3
            hy = 13 * math.cos(t) - 5 * math.cos(2 * t) - 2 * math.cos(3 * t) - math.cos(4 * t)
            heart.append((c + hx * size, c - hy * size))
        draw.polygon(heart, fill=color)

        cx, cy = L.STAMP_CENTER
        canvas.alpha_composite(layer, dest=(_px(cx) - half, _px(cy) - half))

    @staticmethod
    def _draw_rule(draw: ImageDraw.ImageDraw) -> None:
        dash, gap = L.RULE_DASH
        start, end = L.RULE_X
        y = _px(L.RULE_Y)
        for x in range(start, end, dash + gap):
            draw.line([(_px(x), y), (_px(min(x + dash, end)), y)], fill=L.RULE_COLOR, width=_px(1))

    @staticmethod
    def _draw_member_mark(draw: ImageDraw.ImageDraw, card: PassCard, fonts: dict[str, FontType]) -> None:
        grid = member_mark_grid(card.id)
        ox, oy = L.MARK_ORIGIN
        cell = L.MARK_CELL
        span = cell * len(grid)
        pad = L.MARK_PADDING
        draw.rectangle([_px(ox - pad), _px(oy - pad), _px(ox + span + pad), _px(oy + span + pad)], fill=L.FRAME_FILL)

        for row, cells in enumerate(grid):
            for col, on in enumerate(cells):
                if on:
                    x, y = ox + col * cell, oy + row * cell
                    draw.rectangle([_px(x), _px(y), _px(x + cell) - 1, _px(y + cell) - 1], fill=L.MARK_COLOR)

        draw.text(
            (_px(ox + span / 2), _px(L.MARK_ID_BASELINE)),
            card.id,
            font=fonts["mono"],
            fill=L.LABEL_COLOR,
            anchor="ms",
        )
