# 📄 File: plantlens/modules/plant_records/presentation/api/__init__.py
