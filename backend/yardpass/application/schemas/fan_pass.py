"""Pydantic DTOs (Data Transfer Objects) for the fan pass feature."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from yardpass.domain.entities import FanPass, Gender

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PassCreate(BaseModel):
    """Schema for creating a pass.

    Fields default to empty so that missing values reach the service's
    validation and come back as a 400 with a readable message.
    """

    model_config = _CAMEL

    name: str = Field("", max_length=200, examples=["Ada Obi"])
    email: str = Field("", max_length=320, examples=["ada@example.com"])
    phone: str = Field("", max_length=40, examples=["+234 800 000 0000"])
    gender: str = Field("", examples=["female"])
    png_data_url: str = ""
    photo_data_url: str | None = None
    id: str | None = Field(None, description="Client-generated pass id printed on the image")


class PassResponse(BaseModel):
    """Schema returned to the client — the stored FanRecord."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    anon_id: str
    name: str
    email: str
    phone: str
    gender: Gender
    title: str
    status: str
    year_joined: int
    created_at: datetime
    png_data_url: str
    photo_data_url: str | None = None
    ip: str
    user_agent: str

    @classmethod
    def from_entity(cls, fan_pass: FanPass) -> "PassResponse":
        return cls.model_validate(fan_pass, from_attributes=True)

    def to_entity(self) -> FanPass:
        return FanPass(
            id=self.id,
            anon_id=self.anon_id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            gender=self.gender,
            png_data_url=self.png_data_url,
            year_joined=self.year_joined,
            created_at=self.created_at,
            photo_data_url=self.photo_data_url,
            ip=self.ip,
            user_agent=self.user_agent,
        )


class PassEnvelope(BaseModel):
    """``{"pass": FanRecord | null}`` response body."""

    model_config = ConfigDict(populate_by_name=True)

    fan_pass: PassResponse | None = Field(None, alias="pass")


class PassCreatedEnvelope(PassEnvelope):
    success: bool = True


class PassListResponse(BaseModel):
    passes: list[PassResponse]
