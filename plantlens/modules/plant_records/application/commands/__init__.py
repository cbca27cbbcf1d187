# 📄 File: plantlens/modules/plant_records/application/commands/__init__.py
