"""Pydantic DTOs for the CMS document.

Items accept unknown keys and keep them, so the admin panel can add fields
without a backend release.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CmsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# ── Releases & visuals ───────────────────────────────────────────────

class LinkSource(CmsModel):
    label: str
    href: str


class TrackItem(CmsModel):
    title: str
    meta: str | None = None
    duration: str | None = None


class ReleaseItem(CmsModel):
    id: str
    title: str
    subtitle: str | None = None
    year: str | None = None
    art: str = ""
    chips: list[str] = Field(default_factory=list)
    links: dict[str, str] = Field(default_factory=dict)
    primary: str | None = None
    fan_link: str | None = None
    link_source: LinkSource | None = None
    tracklist: list[TrackItem] | None = None
    format: str | None = None
    enabled: bool = True
    highlight: bool = False


class VisualItem(CmsModel):
    id: str
    title: str
    kind: str
    year: str
    href: str
    tag: str | None = None
    enabled: bool = True


# ── Tour ─────────────────────────────────────────────────────────────

class ShowItem(CmsModel):
    id: str
    date_label: str
    city: str
    venue: str
    href: str | None = None
    status: Literal["announce", "onsale", "soldout"] | None = None


class TourConfig(CmsModel):
    poster_src: str = ""
    poster_alt: str = ""
    headline: str = ""
    description: str = ""
    ticket_portal_href: str | None = None
    notify_cta_label: str | None = None
    provider_hint: str | None = None


class TourSection(CmsModel):
    shows: list[ShowItem] = Field(default_factory=list)
    config: TourConfig = Field(default_factory=TourConfig)


# ── Store ────────────────────────────────────────────────────────────

class MerchItem(CmsModel):
    id: str
    name: str
    price: str
    images: list[str] = Field(default_factory=list)
    tag: str | None = None
    available: bool = False
    links: list[LinkSource] | None = None


class StoreConfig(CmsModel):
    eyebrow: str | None = None
    title: str = ""
    desc: str | None = None
    store_href: str | None = None


class StoreSection(CmsModel):
    merch: list[MerchItem] = Field(default_factory=list)
    config: StoreConfig = Field(default_factory=StoreConfig)


# ── Newsletter / press ───────────────────────────────────────────────

class PressItem(CmsModel):
    id: str
    title: str
    outlet: str
    date: str
    href: str
    image: str | None = None
    tag: str | None = None
    excerpt: str | None = None


class EmbedVideo(CmsModel):
    id: str
    title: str
    meta: str | None = None
    youtube_id: str
    href: str | None = None


class NewsletterSection(CmsModel):
    press_items: list[PressItem] = Field(default_factory=list)
    videos: list[EmbedVideo] = Field(default_factory=list)
    background_image: str | None = None


# ── Document ─────────────────────────────────────────────────────────

class CmsDocument(CmsModel):
    """The single live CMS document."""

    version: int = 0
    updated_at: int = 0
    releases: list[ReleaseItem] = Field(default_factory=list)
    visuals: list[VisualItem] = Field(default_factory=list)
    tour: TourSection = Field(default_factory=TourSection)
    store: StoreSection = Field(default_factory=StoreSection)
    newsletter: NewsletterSection = Field(default_factory=NewsletterSection)


class CmsUpdateRequest(BaseModel):
    """Body of ``PUT /api/admin/cms``."""

    cms: dict[str, Any]


class CmsResponse(BaseModel):
    ok: bool = True
    cms: dict[str, Any]
