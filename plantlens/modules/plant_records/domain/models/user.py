# 📄 File: plantlens/modules/plant_records/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# A very small user record kept next to the plants. Nothing signs in with it yet.
# 🧪 Purpose (Technical Summary):
# Pydantic models for the placeholder User entity; the password is opaque and stored as given.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# plant_store.py, storage backends

from pydantic import field_validator

from .plant import CamelModel


class UserCreate(CamelModel):
    """Fields accepted when creating a user"""

    username: str
    password: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Username cannot be empty')
        return v


class User(UserCreate):
    """Persisted user"""

    id: int
