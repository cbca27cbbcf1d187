# 📄 File: plantlens/modules/plant_records/presentation/__init__.py
