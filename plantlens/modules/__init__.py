# 📄 File: plantlens/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds the feature areas of the app. Today there is one: plant records.
# 🧪 Purpose (Technical Summary):
# Bounded-module package for the modular monolith.
