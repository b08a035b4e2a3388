from .fan_pass import FanPass, Gender
from .pass_card import PassCard, format_created_label
from .pass_view import PassForm, PassView, PassViewEvent, PassViewState, transition

__all__ = [
    "FanPass",
    "Gender",
    "PassCard",
    "format_created_label",
    "PassForm",
    "PassView",
    "PassViewEvent",
    "PassViewState",
    "transition",
]
