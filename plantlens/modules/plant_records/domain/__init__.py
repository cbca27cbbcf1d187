# 📄 File: plantlens/modules/plant_records/domain/__init__.py
