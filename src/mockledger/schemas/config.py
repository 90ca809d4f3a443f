from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    name: str = Field(default="mock", min_length=1)
    empty_registration: Literal["error", "ignore"] = "error"
    thread_safe: bool = True
    check_payload_types: bool = True

    @field_validator("name")
    @classmethod
    def _name_is_identifier_like(cls, value: str) -> str:
        if value != value.strip():
            raise ValueError("name must not have surrounding whitespace")
        return value
