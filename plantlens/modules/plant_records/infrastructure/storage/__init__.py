# 📄 File: plantlens/modules/plant_records/infrastructure/storage/__init__.py
# 🧭 Purpose (Layman Explanation):
# The three places plant records can live, plus the chooser between them.
# 🧪 Purpose (Technical Summary):
# PlantStore backend exports and factory.
# 🔗 Dependencies:
# memory_store.py, file_store.py, object_store.py, factory.py
# 🔄 Connected Modules / Calls From:
# main.py, tests

from .factory import create_plant_store
from .file_store import FilePlantStore
from .memory_store import MemoryPlantStore
from .object_store import ObjectPlantStore

__all__ = [
    "create_plant_store",
    "FilePlantStore",
    "MemoryPlantStore",
    "ObjectPlantStore",
]
