from pydantic import BaseModel
from typing import Optional


class VerifiedIdentity(BaseModel):
    """What the identity provider vouches for; attached to every authenticated request."""
    subject_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
