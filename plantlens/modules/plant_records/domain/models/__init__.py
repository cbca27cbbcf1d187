# 📄 File: plantlens/modules/plant_records/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the plant and user record shapes in one place.
# 🧪 Purpose (Technical Summary):
# Domain model exports for the plant_records module.
# 🔗 Dependencies:
# plant.py, user.py
# 🔄 Connected Modules / Calls From:
# Repositories, storage backends, handlers, API routes

from .plant import (
    DEFAULT_AROMA_LEVEL,
    INITIAL_IDENTIFICATION_COUNT,
    IdentificationResult,
    Plant,
    PlantCreate,
)
from .user import User, UserCreate

__all__ = [
    "DEFAULT_AROMA_LEVEL",
    "INITIAL_IDENTIFICATION_COUNT",
    "IdentificationResult",
    "Plant",
    "PlantCreate",
    "User",
    "UserCreate",
]
