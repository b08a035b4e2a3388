from .cms_repository import CMS_KEY, KeyValueCmsRepository
from .pass_repository import ALL_ANON_IDS_KEY, KeyValuePassRepository, pass_key

__all__ = [
    "CMS_KEY",
    "KeyValueCmsRepository",
    "ALL_ANON_IDS_KEY",
    "KeyValuePassRepository",
    "pass_key",
]
