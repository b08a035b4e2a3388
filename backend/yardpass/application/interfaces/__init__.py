from .key_value_store import KeyValueStore
from .pass_repository import PassRepository
from .cms_repository import CmsRepository
from .card_renderer import CardRenderer, data_url_to_bytes, image_to_data_url, png_to_data_url
from .pass_gateway import PassGateway, PassSubmission

__all__ = [
    "KeyValueStore",
    "PassRepository",
    "CmsRepository",
    "CardRenderer",
    "png_to_data_url",
    "image_to_data_url",
    "data_url_to_bytes",
    "PassGateway",
    "PassSubmission",
]
