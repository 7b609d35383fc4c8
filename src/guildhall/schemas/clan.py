from pydantic import BaseModel, ConfigDict, Field


class ClanCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    public_id: str = Field(..., alias="publicID")
    name: str
    owner_public_id: str = Field(..., alias="ownerPublicID")
    metadata: str = Field(default="{}", description="Opaque JSON document")


class ClanUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    owner_public_id: str = Field(..., alias="ownerPublicID")
    metadata: str = Field(default="{}", description="Opaque JSON document")


class ClanLeave(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_public_id: str = Field(..., alias="ownerPublicID")


class ClanTransferOwnership(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_public_id: str = Field(..., alias="ownerPublicID")
    player_public_id: str = Field(..., alias="playerPublicID")
