# 📄 File: plantlens/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the app's web routes.
# 🧪 Purpose (Technical Summary):
# API v1 package: router aggregation and health endpoint.
