from fastapi import APIRouter
from app.api.v1.endpoints import compliance, attendance, patrol, geofence, alerts

api_router = APIRouter()

# Register routes
api_router.include_router(compliance.router, prefix="/compliance", tags=["Compliance"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(patrol.router, prefix="/patrol", tags=["Patrol"])
api_router.include_router(geofence.router, prefix="/geofence", tags=["Geofence"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["Alerts"])
