"""Pass flow — drives one device's signup card through the view states.

The flow owns a PassView and talks to two ports: a PassGateway for the
stored pass and a CardRenderer for previews and the final export.
"""

from datetime import datetime, timezone
from typing import Any

from yardpass.application.interfaces import (
    CardRenderer,
    PassGateway,
    PassSubmission,
    data_url_to_bytes,
    image_to_data_url,
    png_to_data_url,
)
from yardpass.application.services.pass_service import validate_pass_fields
from yardpass.domain.entities import (
    FanPass,
    Gender,
    PassCard,
    PassForm,
    PassView,
    PassViewEvent,
    PassViewState,
    format_created_label,
)
from yardpass.domain.exceptions import (
    InvalidTransitionError,
    PassSaveError,
    PassValidationError,
    StorageError,
)
from yardpass.domain.identity import generate_fan_id
from yardpass.infrastructure.logging.flow_logger import FlowLogger, FlowStage

flog = FlowLogger("yardpass.flow")

SAVE_FAILED_MESSAGE = "Failed to save pass"
_FORM_FIELDS = frozenset({"name", "email", "phone", "gender", "photo"})


class PassFlow:
    """Application service for the signup card of a single anonymous device."""

    def __init__(self, anon_id: str, gateway: PassGateway, renderer: CardRenderer):
        self.anon_id = anon_id
        self._gateway = gateway
        self._renderer = renderer
        self.view = PassView()

    @property
    def state(self) -> PassViewState:
        return self.view.state

    @property
    def saved_pass(self) -> FanPass | None:
        return self.view.saved_pass

    async def load(self) -> PassViewState:
        """Fetch the stored pass; unlock if there is one, otherwise lock."""
        self.view = PassView()
        flog.step_start(FlowStage.LOAD, "Fetching saved pass", anon_id=self.anon_id)
        try:
            saved = await self._gateway.fetch(self.anon_id)
        except StorageError as exc:
            flog.step_error(FlowStage.LOAD, "Could not fetch saved pass", error=exc)
            saved = None

        if saved is None:
            flog.step_complete(FlowStage.LOAD, "No saved pass")
            return self.view.apply(PassViewEvent.LOADED_EMPTY)

        self.view.saved_pass = saved
        self.view.form = PassForm(
            name=saved.name,
            email=saved.email,
            phone=saved.phone,
            gender=saved.gender,
            photo=saved.photo_data_url,
        )
        flog.step_complete(FlowStage.LOAD, "Saved pass restored", pass_id=saved.id)
        return self.view.apply(PassViewEvent.LOADED_EXISTING)

    def update_form(self, **fields: Any) -> PassForm:
        """Edit the form. Only allowed while the card is locked."""
        if not self.view.form_editable:
            raise InvalidTransitionError(self.view.state.value, "update_form")
        unknown = set(fields) - _FORM_FIELDS
        if unknown:
            raise TypeError(f"Unknown form fields: {', '.join(sorted(unknown))}")

        if "gender" in fields:
            fields["gender"] = _parse_gender(fields["gender"])
        for key, value in fields.items():
            setattr(self.view.form, key, value)
        self.view.error = ""
        return self.view.form

    def current_card(self, now: datetime | None = None) -> PassCard:
        saved = self.view.saved_pass
        if self.view.state is PassViewState.UNLOCKED and saved is not None:
            return PassCard.from_pass(saved)
        form = self.view.form
        return PassCard.preview(
            name=form.name,
            email=form.email,
            phone=form.phone,
            gender=form.gender,
            photo=form.photo,
            now=now,
        )

    async def preview(self) -> bytes:
        """Render the card as it should look right now."""
        card = self.current_card()
        with flog.timed_step(FlowStage.PREVIEW, "Rendering preview", state=self.view.state.value):
            png = await self._renderer.render_png(card, locked=self.view.locked)
        return png

    async def submit(self, now: datetime | None = None) -> FanPass:
        """Validate the form, export the unlocked card and store it."""
        if self.view.state is not PassViewState.LOCKED:
            raise InvalidTransitionError(self.view.state.value, PassViewEvent.SUBMIT.value)

        form = self.view.form
        try:
            gender = validate_pass_fields(form.name, form.email, form.phone, form.gender)
        except PassValidationError as exc:
            self.view.error = exc.message
            flog.step_error(FlowStage.VALIDATE, exc.message)
            raise

        self.view.apply(PassViewEvent.SUBMIT)
        self.view.error = ""
        moment = now or datetime.now(timezone.utc)
        card = PassCard(
            id=generate_fan_id(moment),
            name=form.name.strip(),
            email=form.email.strip(),
            phone=form.phone.strip(),
            gender=gender,
            year_joined=moment.year,
            created_label=format_created_label(moment),
            photo=form.photo,
        )

        try:
            with flog.timed_step(FlowStage.EXPORT, "Rendering export card", pass_id=card.id):
                png = await self._renderer.render_png(card, locked=False)
            submission = PassSubmission(
                name=card.name,
                email=card.email,
                phone=card.phone,
                gender=gender,
                png_data_url=png_to_data_url(png),
                photo_data_url=_photo_data_url(form.photo),
                pass_id=card.id,
            )
            with flog.timed_step(FlowStage.SAVE, "Saving pass"):
                saved = await self._gateway.save(self.anon_id, submission)
        except Exception as exc:
            self.view.apply(PassViewEvent.SAVE_FAILED)
            self.view.error = SAVE_FAILED_MESSAGE
            if isinstance(exc, PassSaveError):
                raise
            raise PassSaveError(SAVE_FAILED_MESSAGE) from exc

        self.view.saved_pass = saved
        self.view.apply(PassViewEvent.SAVE_SUCCEEDED)
        flog.step_complete(FlowStage.COMPLETE, "Pass unlocked", pass_id=saved.id)
        return saved

    def regenerate(self, confirm: bool) -> bool:
        """Start over with an empty form. Stored data is left alone."""
        if not confirm:
            return False
        self.view.apply(PassViewEvent.REGENERATE)
        self.view.form = PassForm()
        self.view.saved_pass = None
        self.view.error = ""
        return True

    def download(self) -> bytes:
        """The stored export image, exactly as it was saved."""
        saved = self.view.saved_pass
        if self.view.state is not PassViewState.UNLOCKED or saved is None:
            raise InvalidTransitionError(self.view.state.value, "download")
        return data_url_to_bytes(saved.png_data_url)

    @property
    def download_filename(self) -> str:
        saved = self.view.saved_pass
        return f"{saved.id}.png" if saved else "yard-pass.png"


def _parse_gender(value: Gender | str | None) -> Gender | None:
    if value is None or value == "":
        return None
    try:
        return Gender(value)
    except ValueError:
        raise PassValidationError("Category must be 'male' or 'female'") from None


def _photo_data_url(photo: bytes | str | None) -> str | None:
    if not photo:
        return None
    if isinstance(photo, bytes):
        return image_to_data_url(photo)
    return photo
