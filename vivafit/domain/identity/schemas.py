"""Identity schemas - session and actor shapes"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ...models import Role


class SessionInfo(BaseModel):
    """What the auth provider tells us about the caller"""

    model_config = ConfigDict(frozen=True)

    account_id: str
    email: Optional[str] = None
    name: Optional[str] = None


class Actor(BaseModel):
    """The authenticated identity performing an operation"""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    name: str
    email: Optional[str] = None
    is_fallback: bool = False

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT

    @property
    def is_professional(self) -> bool:
        return self.role == Role.PROFESSIONAL
