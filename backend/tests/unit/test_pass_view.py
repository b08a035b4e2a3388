"""Unit tests for the pass view state machine."""

import pytest

from yardpass.domain.entities import PassView, PassViewEvent, PassViewState, transition
from yardpass.domain.exceptions import InvalidTransitionError

S = PassViewState
E = PassViewEvent

ALLOWED = {
    (S.LOADING, E.LOADED_EMPTY): S.LOCKED,
    (S.LOADING, E.LOADED_EXISTING): S.UNLOCKED,
    (S.LOCKED, E.SUBMIT): S.GENERATING,
    (S.GENERATING, E.SAVE_SUCCEEDED): S.UNLOCKED,
    (S.GENERATING, E.SAVE_FAILED): S.LOCKED,
    (S.UNLOCKED, E.REGENERATE): S.LOCKED,
}


@pytest.mark.parametrize(("state", "event"), list(ALLOWED))
def test_allowed_transitions(state, event):
    assert transition(state, event) is ALLOWED[(state, event)]


@pytest.mark.parametrize(
    ("state", "event"),
    [(s, e) for s in S for e in E if (s, e) not in ALLOWED],
)
def test_other_transitions_are_rejected(state, event):
    with pytest.raises(InvalidTransitionError):
        transition(state, event)


def test_view_is_locked_until_unlocked():
    view = PassView()
    assert view.locked
    assert not view.form_editable

    view.apply(E.LOADED_EMPTY)
    assert view.locked
    assert view.form_editable

    view.apply(E.SUBMIT)
    assert view.locked
    assert not view.form_editable

    view.apply(E.SAVE_SUCCEEDED)
    assert not view.locked
    assert view.state is S.UNLOCKED
