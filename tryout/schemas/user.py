from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: Optional[str] = None
    role: str = "student"
    class_id: Optional[int] = None
    is_active: bool = True
