from typing import Optional

from pydantic import Field, field_validator

from .base_models import CamelModel


class SettingsPatch(CamelModel):
    """Partial settings update; fields left out keep their stored value"""

    selected_option: Optional[str] = Field(None, max_length=100)
    badge_display_enabled: Optional[bool] = None
    auto_sale_enabled: Optional[bool] = None

    @field_validator("selected_option")
    @classmethod
    def validate_selected_option(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("selectedOption must not be blank")
        return v

    def changes(self) -> dict:
        """Column values this patch sets"""
        return self.model_dump(exclude_none=True)
