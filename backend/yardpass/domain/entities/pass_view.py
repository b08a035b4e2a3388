"""Pass view state machine — which data the card is allowed to reveal.

Transitions:
    LOADING    ─LOADED_EMPTY────▶ LOCKED
    LOADING    ─LOADED_EXISTING─▶ UNLOCKED
    LOCKED     ─SUBMIT──────────▶ GENERATING
    GENERATING ─SAVE_SUCCEEDED──▶ UNLOCKED
    GENERATING ─SAVE_FAILED─────▶ LOCKED
    UNLOCKED   ─REGENERATE──────▶ LOCKED
"""

from dataclasses import dataclass, field
from enum import Enum

from yardpass.domain.entities.fan_pass import FanPass, Gender
from yardpass.domain.exceptions import InvalidTransitionError


class PassViewState(str, Enum):
    LOADING = "loading"
    LOCKED = "locked"
    GENERATING = "generating"
    UNLOCKED = "unlocked"


class PassViewEvent(str, Enum):
    LOADED_EMPTY = "loaded_empty"
    LOADED_EXISTING = "loaded_existing"
    SUBMIT = "submit"
    SAVE_SUCCEEDED = "save_succeeded"
    SAVE_FAILED = "save_failed"
    REGENERATE = "regenerate"


_TRANSITIONS: dict[tuple[PassViewState, PassViewEvent], PassViewState] = {
    (PassViewState.LOADING, PassViewEvent.LOADED_EMPTY): PassViewState.LOCKED,
    (PassViewState.LOADING, PassViewEvent.LOADED_EXISTING): PassViewState.UNLOCKED,
    (PassViewState.LOCKED, PassViewEvent.SUBMIT): PassViewState.GENERATING,
    (PassViewState.GENERATING, PassViewEvent.SAVE_SUCCEEDED): PassViewState.UNLOCKED,
    (PassViewState.GENERATING, PassViewEvent.SAVE_FAILED): PassViewState.LOCKED,
    (PassViewState.UNLOCKED, PassViewEvent.REGENERATE): PassViewState.LOCKED,
}


def transition(state: PassViewState, event: PassViewEvent) -> PassViewState:
    """Return the state reached from ``state`` on ``event``."""
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state.value, event.value) from None


@dataclass
class PassForm:
    """Editable signup form fields."""

    name: str = ""
    email: str = ""
    phone: str = ""
    gender: Gender | None = None
    photo: bytes | str | None = None


@dataclass
class PassView:
    """Client-side view of one device's pass."""

    state: PassViewState = PassViewState.LOADING
    form: PassForm = field(default_factory=PassForm)
    saved_pass: FanPass | None = None
    error: str = ""

    @property
    def locked(self) -> bool:
        """True while the card must not reveal real values."""
        return self.state is not PassViewState.UNLOCKED

    @property
    def form_editable(self) -> bool:
        return self.state is PassViewState.LOCKED

    def apply(self, event: PassViewEvent) -> PassViewState:
        self.state = transition(self.state, event)
        return self.state
