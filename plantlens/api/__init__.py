# 📄 File: plantlens/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web layer: versioned routes, the health check and request middleware.
# 🧪 Purpose (Technical Summary):
# API package initialization.
