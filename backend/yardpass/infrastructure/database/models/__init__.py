from .key_value import KeyValueModel, SetMemberModel

__all__ = [
    "KeyValueModel",
    "SetMemberModel",
]
