# 📄 File: plantlens/shared/infrastructure/external_apis/__init__.py
# 🧭 Purpose (Layman Explanation):
# The general-purpose web client used to talk to outside services.
# 🧪 Purpose (Technical Summary):
# aiohttp API client export.

from .api_client import APIClient

__all__ = ["APIClient"]
