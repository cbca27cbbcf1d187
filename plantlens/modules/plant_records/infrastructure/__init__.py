# 📄 File: plantlens/modules/plant_records/infrastructure/__init__.py
