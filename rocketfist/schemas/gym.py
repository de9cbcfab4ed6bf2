from pydantic import BaseModel, ConfigDict


class GymResponse(BaseModel):
    id: str
    name: str
    slug: str
    timezone: str

    model_config = ConfigDict(from_attributes=True)
