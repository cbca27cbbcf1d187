# 📄 File: plantlens/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# Acts like a traffic director, sending plant requests to the plant handlers.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation combining module routers under the configured API prefix.
# 🔗 Dependencies:
# FastAPI, plantlens.modules.plant_records.presentation.api.v1.plants
# 🔄 Connected Modules / Calls From:
# plantlens.main

from fastapi import APIRouter

from plantlens.modules.plant_records.presentation.api.v1.plants import plants_router

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(plants_router)
