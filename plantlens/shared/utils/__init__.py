# 📄 File: plantlens/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Small helpers for logging and for handling photos.
# 🧪 Purpose (Technical Summary):
# Utility package: structured logging and image helpers.
