from pydantic import BaseModel, ConfigDict, Field


class PlayerCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    public_id: str = Field(..., alias="publicID")
    name: str
    metadata: str = Field(default="{}", description="Opaque JSON document")


class PlayerUpdate(BaseModel):
    name: str
    metadata: str = Field(default="{}", description="Opaque JSON document")
