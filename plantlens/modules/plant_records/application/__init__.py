# 📄 File: plantlens/modules/plant_records/application/__init__.py
