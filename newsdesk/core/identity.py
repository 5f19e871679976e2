from pydantic import BaseModel

from newsdesk.core.exceptions import Unauthorized


class Identity(BaseModel):
    """The verified caller. user_id == 0 means no verified identity."""

    user_id: int = 0
    email: str = ""

    class Config:
        frozen = True

    @property
    def is_anonymous(self) -> bool:
        return self.user_id == 0


ANONYMOUS = Identity()


def require(identity: Identity, stage: str = "[AUTH] require = 1") -> Identity:
    """Reject callers without a verified identity. Returns the identity for chaining."""
    if identity is None or identity.is_anonymous:
        raise Unauthorized("Unauthorized", stage=stage)
    return identity
