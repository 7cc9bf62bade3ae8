from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

JSON_CONTENT_TYPE = "application/json"


class InboundRequest(BaseModel):
    """Raw request as handed over by the transport."""

    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | bytes = ""

    @field_validator("headers")
    @classmethod
    def lowercase_header_keys(cls, v: dict[str, str]) -> dict[str, str]:
        return {key.lower(): value for key, value in v.items()}

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class RequestEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    signature: str
    timestamp: int
    body: str | bytes


class PayloadIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    id: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"{self.type}:{self.id}"


class Ack(BaseModel):
    """Status code and body to write back to Slack."""

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    body: bytes = b""

    @property
    def headers(self) -> dict[str, str]:
        if not self.body:
            return {}
        return {
            "Content-Type": JSON_CONTENT_TYPE,
            "Content-Length": str(len(self.body)),
        }
