# 📄 File: plantlens/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# The checkpoints every request passes: request logging and error formatting.
# 🧪 Purpose (Technical Summary):
# Middleware and exception handler exports.
# 🔗 Dependencies:
# logging.py, error_handling.py
# 🔄 Connected Modules / Calls From:
# plantlens.main

from .error_handling import register_exception_handlers
from .logging import RequestLoggingMiddleware

__all__ = ["register_exception_handlers", "RequestLoggingMiddleware"]
