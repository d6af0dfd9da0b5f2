# taskhub/utils/errors.py
from typing import Optional
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """A required field is missing or malformed"""

    def __init__(self, field: str, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": field, "message": message},
        )
        self.field = field
        self.message = message


class NotFoundError(HTTPException):
    def __init__(self, entity: str, entity_id: Optional[str] = None):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthorizationError(HTTPException):
    """The access policy denied the operation; nothing was changed"""

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


class AuthenticationError(HTTPException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
