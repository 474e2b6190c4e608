from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PrincipalResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    type_user_id: int
