"""Auth form definitions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=128)
    full_name: str | None = Field(default=None, max_length=120)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.replace("_", "").replace("-", "").replace(".", "").isalnum():
            raise ValueError("Use letters, digits, dots, dashes or underscores.")
        return value


class LoginForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


__all__ = ["LoginForm", "SignupForm"]
