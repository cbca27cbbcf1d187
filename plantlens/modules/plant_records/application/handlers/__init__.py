# 📄 File: plantlens/modules/plant_records/application/handlers/__init__.py
