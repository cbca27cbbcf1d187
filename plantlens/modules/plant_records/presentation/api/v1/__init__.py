# 📄 File: plantlens/modules/plant_records/presentation/api/v1/__init__.py
