from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    username: str
    id: str

    model_config = ConfigDict(from_attributes=True)
