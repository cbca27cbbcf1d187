# 📄 File: plantlens/modules/plant_records/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Domain services for plant records: the photo identification contract.
# 🧪 Purpose (Technical Summary):
# Identification gateway interface and normalization helper exports.
# 🔗 Dependencies:
# plant_identifier.py
# 🔄 Connected Modules / Calls From:
# Identifier implementations, command handlers

from .plant_identifier import (
    FIELD_DEFAULTS,
    PlantIdentifier,
    clamp_confidence,
    normalize_identification,
)

__all__ = [
    "FIELD_DEFAULTS",
    "PlantIdentifier",
    "clamp_confidence",
    "normalize_identification",
]
