# 📄 File: plantlens/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of the app uses: settings, error types, logging, image helpers and cloud clients.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, exceptions, utilities and infrastructure clients.
