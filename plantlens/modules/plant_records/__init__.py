# 📄 File: plantlens/modules/plant_records/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about identified plants: what we store, where we store it and the web endpoints around it.
# 🧪 Purpose (Technical Summary):
# Plant records module: domain models and store contract, storage backends, identification gateway,
# identify-and-create command handling and HTTP presentation.
# 🔗 Dependencies:
# FastAPI, pydantic, supabase, aiohttp, Pillow
# 🔄 Connected Modules / Calls From:
# plantlens.main, plantlens.api.v1.router

"""
Plant Records Module

Layers:
- domain: Plant/User models, PlantStore contract, PlantIdentifier contract
- application: IdentifyPlantCommand and its handler
- infrastructure: memory, filesystem and object-store backends; OpenAI, mock and Nominatim clients
- presentation: request schemas, dependencies and /plants routes
"""
