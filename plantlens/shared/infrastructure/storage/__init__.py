# 📄 File: plantlens/shared/infrastructure/storage/__init__.py
# 🧭 Purpose (Layman Explanation):
# The cloud storage connection.
# 🧪 Purpose (Technical Summary):
# Supabase Storage blob client export.

from .supabase_storage import SupabaseStorageClient

__all__ = ["SupabaseStorageClient"]
