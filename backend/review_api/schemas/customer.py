from typing import Optional

from pydantic import BaseModel, ConfigDict


# Required-field and email-format checks happen in customer_resolver so that
# they answer ARGUMENTS_INVALID like every other client-input error.
class CustomerCreate(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerUpdate(BaseModel):
    id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerRef(BaseModel):
    """Customer attached to an incoming review: an id, an email, or both."""

    id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    phone: Optional[str] = None
