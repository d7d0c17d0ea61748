from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from review_api.schemas.customer import CustomerOut, CustomerRef


class ReviewType(str, Enum):
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


class ReviewCreate(BaseModel):
    # Presence checks live in review_ingestion so they surface as
    # ARGUMENTS_INVALID rather than as a malformed body. A client-sent
    # "type" is ignored: sentiment is always computed.
    text: Optional[str] = None
    customer: Optional[CustomerRef] = None


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    type: ReviewType
    customer: CustomerOut
