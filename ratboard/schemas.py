"""Request bodies accepted at the API boundary."""

import re
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, Field

USERNAME_RE = re.compile(r"[a-z0-9_]{3,32}", re.IGNORECASE)

Status = Literal["todo", "doing", "done"]


def is_valid_username(value) -> bool:
    return isinstance(value, str) and USERNAME_RE.fullmatch(value) is not None


def _check_username(value: str) -> str:
    if not is_valid_username(value):
        raise ValueError("username must be 3-32 characters of [a-z0-9_]")
    return value


Username = Annotated[str, Field(strict=True), AfterValidator(_check_username)]


class LoginRequest(BaseModel):
    username: Username
    password: str = Field(..., strict=True, min_length=3, max_length=128)


class NewTask(BaseModel):
    username: Username
    title: str = Field(..., strict=True, min_length=1, max_length=100)
    # Length only. The content is stored and returned exactly as sent.
    description: str = Field(..., strict=True, max_length=5000)
    status: Status = "todo"


class StatusUpdate(BaseModel):
    status: Status
