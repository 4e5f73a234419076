from app.schemas.common import CamelModel


class UserStatusUpdate(CamelModel):
    is_active: bool


class EmployerVerificationUpdate(CamelModel):
    is_verified: bool
