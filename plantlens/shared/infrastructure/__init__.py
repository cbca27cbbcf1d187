# 📄 File: plantlens/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Connections to the outside world: cloud storage and web APIs.
# 🧪 Purpose (Technical Summary):
# Shared infrastructure clients (Supabase Storage, aiohttp API client).
