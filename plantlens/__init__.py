# 📄 File: plantlens/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'plantlens' folder as the plant identification app and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version information.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantlens.main, packaging metadata

"""PlantLens: photograph a leaf, identify the plant, keep a record of where it was found."""

__version__ = "1.0.0"
__app_name__ = "PlantLens API"
