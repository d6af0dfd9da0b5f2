# taskhub/schemas/tokens.py
from pydantic import BaseModel
from taskhub.schemas.user import UserOut

class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut
