from pydantic import BaseModel, ConfigDict, Field


class MembershipApplication(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_public_id: str = Field(..., alias="playerPublicID")
    level: int


class MembershipInvitation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_public_id: str = Field(..., alias="playerPublicID")
    requestor_public_id: str = Field(..., alias="requestorPublicID")
    level: int


class MembershipInvitationAnswer(BaseModel):
    """The invited player answers for themselves."""

    model_config = ConfigDict(populate_by_name=True)

    player_public_id: str = Field(..., alias="playerPublicID")


class MembershipAction(BaseModel):
    """Body for application answers, promote/demote and delete requests."""

    model_config = ConfigDict(populate_by_name=True)

    player_public_id: str = Field(..., alias="playerPublicID")
    requestor_public_id: str = Field(..., alias="requestorPublicID")
