# 📄 File: plantlens/modules/plant_records/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Points to the rulebook every plant record store follows.
# 🧪 Purpose (Technical Summary):
# Repository interface exports.
# 🔗 Dependencies:
# plant_store.py
# 🔄 Connected Modules / Calls From:
# Storage backends, handlers, dependencies

from .plant_store import INITIAL_ID, PlantStore, find_duplicate, sort_newest_first

__all__ = ["INITIAL_ID", "PlantStore", "find_duplicate", "sort_newest_first"]
