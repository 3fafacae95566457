from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# Discovery (GET / OPTIONS)
class ActionParameter(BaseModel):
    name: str
    label: str
    required: bool = True


class LinkedAction(BaseModel):
    label: str
    href: str
    parameters: List[ActionParameter] = Field(default_factory=list)


class ActionLinks(BaseModel):
    actions: List[LinkedAction]


class ActionGetResponse(BaseModel):
    title: str
    icon: str
    description: str
    label: str
    links: Optional[ActionLinks] = None


# Execution (POST)
class ActionPostRequest(BaseModel):
    account: str


class ActionPostResponse(BaseModel):
    transaction: str = Field(..., description="base64 serialized transaction")
    message: Optional[str] = None


# NFT metadata pinned next to the image
class MetadataFile(BaseModel):
    uri: str
    type: str


class Creator(BaseModel):
    address: str
    share: int = Field(..., ge=0, le=100)


class MetadataProperties(BaseModel):
    files: List[MetadataFile]
    creators: List[Creator]

    @field_validator("creators")
    @classmethod
    def shares_total_100(cls, creators: List[Creator]) -> List[Creator]:
        if sum(c.share for c in creators) != 100:
            raise ValueError("creator shares must sum to 100")
        return creators


class MetadataDocument(BaseModel):
    name: str
    description: str
    symbol: str
    image: str
    seller_fee_basis_points: int = Field(..., ge=0, le=10_000)
    properties: MetadataProperties

    @model_validator(mode="after")
    def image_is_pinned(self) -> "MetadataDocument":
        if not self.image:
            raise ValueError("image uri must reference a pinned asset")
        return self


# Action protocol rules file (/actions.json)
class ActionRule(BaseModel):
    pathPattern: str
    apiPath: str


class ActionsJson(BaseModel):
    rules: List[ActionRule]
