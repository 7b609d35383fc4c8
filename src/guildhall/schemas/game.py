from pydantic import BaseModel, ConfigDict, Field, field_validator

from guildhall.domain.policy import GamePolicy

POLICY_FIELDS = tuple(GamePolicy.__dataclass_fields__)


class GameCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    public_id: str = Field(..., alias="publicID", description="Unique game identifier")
    name: str = Field(..., description="Display name")
    metadata: str = Field(default="{}", description="Opaque JSON document")
    min_membership_level: int = Field(..., alias="minMembershipLevel")
    max_membership_level: int = Field(..., alias="maxMembershipLevel")
    min_level_to_accept_application: int = Field(..., alias="minLevelToAcceptApplication")
    min_level_to_create_invitation: int = Field(..., alias="minLevelToCreateInvitation")
    min_level_offset_to_promote_member: int = Field(default=1, alias="minLevelOffsetToPromoteMember")
    min_level_offset_to_demote_member: int = Field(default=1, alias="minLevelOffsetToDemoteMember")
    allow_application: bool = Field(default=True, alias="allowApplication")

    def policy_fields(self) -> dict[str, object]:
        return {field: getattr(self, field) for field in POLICY_FIELDS}

    def policy(self) -> GamePolicy:
        return GamePolicy(**self.policy_fields())


class GameUpdate(BaseModel):
    """Partial game update; omitted fields keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    public_id: str | None = Field(None, alias="publicID", description="Ignored, the path wins")
    name: str | None = None
    metadata: str | None = None
    min_membership_level: int | None = Field(None, alias="minMembershipLevel")
    max_membership_level: int | None = Field(None, alias="maxMembershipLevel")
    min_level_to_accept_application: int | None = Field(None, alias="minLevelToAcceptApplication")
    min_level_to_create_invitation: int | None = Field(None, alias="minLevelToCreateInvitation")
    min_level_offset_to_promote_member: int | None = Field(
        None, alias="minLevelOffsetToPromoteMember"
    )
    min_level_offset_to_demote_member: int | None = Field(
        None, alias="minLevelOffsetToDemoteMember"
    )
    allow_application: bool | None = Field(None, alias="allowApplication")

    @field_validator("*")
    @classmethod
    def reject_null(cls, value):
        # omitted fields skip validation, only an explicit null gets here
        if value is None:
            raise ValueError("must not be null")
        return value
