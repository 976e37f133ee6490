"""Account domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import FontSize, Role, Theme


class ProfileResponse(BaseModel):
    """Schema for the current account's profile"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: Optional[str] = None
    role: Role
    theme: Theme = Theme.SYSTEM
    font_size: FontSize = FontSize.MEDIUM
    high_contrast: bool = False
    is_fallback: bool = False


class ProfileUpdate(BaseModel):
    """Schema for updating name and appearance preferences"""

    name: Optional[str] = Field(None, max_length=255)
    theme: Optional[Theme] = None
    font_size: Optional[FontSize] = None
    high_contrast: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v


class ProfessionalResponse(BaseModel):
    """Schema for a bookable professional"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
