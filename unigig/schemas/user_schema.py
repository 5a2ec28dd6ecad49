from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from unigig.models.user import UserRole


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    role: UserRole
    # Student full name or employer company name
    display_name: str = Field(..., min_length=2, max_length=200)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, v):
        if len(v.encode("utf-8")) > 72:
            raise ValueError('Password must be at most 72 bytes')
        return v

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class UnifiedUser(BaseModel):
    """The role-resolved view of a principal that every gateway operation receives."""
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    role: UserRole
    display_name: str

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.student

    @property
    def is_employer(self) -> bool:
        return self.role == UserRole.employer


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UnifiedUser
