"""
Home Guard API - Status, Arming, Sensor and Camera Management

Provides REST API for:
- Alarm / arming status queries
- Arming mode changes
- Sensor management and activation
- Camera frame upload (cat detection)
- Recent alarm-status history
"""

import threading
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from pydantic import BaseModel, Field

from ..domain.enums import AlarmStatus, ArmingStatus, SensorType
from ..domain.models import Sensor
from ..hardware.image_service import decode_image
from ..services.security_service import SecurityService
from ..services.status_listener import StatusHistory


# =============================================================================
# Pydantic Models
# =============================================================================

class StatusResponse(BaseModel):
    alarm_status: AlarmStatus
    alarm_description: str
    arming_status: ArmingStatus
    arming_description: str
    cat_detected: bool
    sensors_total: int
    sensors_active: int


class ArmingRequest(BaseModel):
    arming_status: ArmingStatus


class SensorCreate(BaseModel):
    sensor_id: str = Field(..., min_length=1)
    sensor_type: SensorType
    name: str = ""


class SensorActivationRequest(BaseModel):
    active: bool


class ImageResponse(BaseModel):
    cat_detected: bool
    alarm_status: AlarmStatus


class StatusChangeResponse(BaseModel):
    status: AlarmStatus
    timestamp: datetime


# =============================================================================
# App Factory
# =============================================================================

def create_app(service: SecurityService, history: Optional[StatusHistory] = None) -> FastAPI:
    """Build the management app around an existing SecurityService.

    Engine calls are serialized with a lock because sync endpoints run on
    FastAPI's thread pool.
    """
    app = FastAPI(title="Home Guard Manager", version="1.0.0")

    history = history or StatusHistory()
    service.add_status_listener(history)

    app.state.service = service
    app.state.history = history
    app.state.lock = threading.Lock()

    # =========================================================================
    # Helpers
    # =========================================================================

    def find_sensor(sensor_id: str) -> Sensor:
        for sensor in service.get_sensors():
            if sensor.sensor_id == sensor_id:
                return sensor
        raise HTTPException(status_code=404, detail=f"Sensor {sensor_id} not found")

    def build_status() -> StatusResponse:
        alarm_status = service.get_alarm_status()
        arming_status = service.get_arming_status()
        sensors = service.get_sensors()
        return StatusResponse(
            alarm_status=alarm_status,
            alarm_description=alarm_status.description,
            arming_status=arming_status,
            arming_description=arming_status.description,
            cat_detected=service.cat_detected,
            sensors_total=len(sensors),
            sensors_active=sum(1 for s in sensors if s.active),
        )

    # =========================================================================
    # Status & Arming
    # =========================================================================

    @app.get("/api/status", response_model=StatusResponse)
    def get_status():
        """Current alarm and arming status."""
        with app.state.lock:
            return build_status()

    @app.put("/api/arming", response_model=StatusResponse)
    def set_arming(request: ArmingRequest):
        """Change the arming mode."""
        with app.state.lock:
            service.set_arming_status(request.arming_status)
            return build_status()

    @app.get("/api/events", response_model=list[StatusChangeResponse])
    def get_events(limit: int = Query(10, ge=1, le=100)):
        """Recent alarm-status changes, newest first."""
        with app.state.lock:
            return [
                StatusChangeResponse(status=c.status, timestamp=c.timestamp)
                for c in history.recent(limit)
            ]

    # =========================================================================
    # Sensors
    # =========================================================================

    @app.get("/api/sensors", response_model=list[Sensor])
    def list_sensors():
        with app.state.lock:
            return sorted(service.get_sensors())

    @app.post("/api/sensors", response_model=Sensor, status_code=201)
    def create_sensor(request: SensorCreate):
        """Register a new sensor. Existing ids are rejected with 409."""
        with app.state.lock:
            if any(s.sensor_id == request.sensor_id for s in service.get_sensors()):
                raise HTTPException(
                    status_code=409, detail=f"Sensor {request.sensor_id} already exists"
                )
            sensor = Sensor(
                sensor_id=request.sensor_id,
                sensor_type=request.sensor_type,
                name=request.name or request.sensor_id,
            )
            service.add_sensor(sensor)
            return sensor

    @app.delete("/api/sensors/{sensor_id}")
    def delete_sensor(sensor_id: str):
        with app.state.lock:
            service.remove_sensor(find_sensor(sensor_id))
            return {"status": "removed", "sensor_id": sensor_id}

    @app.put("/api/sensors/{sensor_id}/active", response_model=StatusResponse)
    def set_sensor_active(sensor_id: str, request: SensorActivationRequest):
        """Activate or deactivate a sensor and apply the alarm rules."""
        with app.state.lock:
            service.change_sensor_activation_status(find_sensor(sensor_id), request.active)
            return build_status()

    # =========================================================================
    # Camera
    # =========================================================================

    @app.post("/api/images", response_model=ImageResponse)
    def upload_image(file: UploadFile = File(...)):
        """Run cat detection on an uploaded camera frame."""
        try:
            frame = decode_image(file.file.read())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        with app.state.lock:
            service.process_image(frame)
            return ImageResponse(
                cat_detected=service.cat_detected,
                alarm_status=service.get_alarm_status(),
            )

    @app.get("/api/camera/stats")
    def get_camera_stats():
        """Detector counters; empty for detectors that keep none."""
        with app.state.lock:
            return service.image_service.get_stats()

    return app
