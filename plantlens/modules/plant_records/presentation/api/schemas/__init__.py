# 📄 File: plantlens/modules/plant_records/presentation/api/schemas/__init__.py
