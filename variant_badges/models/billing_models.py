from pydantic import Field

from .base_models import CamelModel


class CreateChargeRequest(CamelModel):
    plan: str = Field(..., description="Plan key, only 'pro' is sold")
