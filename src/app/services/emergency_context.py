"""
Emergency context bundle handed to the emergency-voice dispatcher.

Privacy first: the phone keeps only area code and last four digits, and
vehicle details are withheld unless the victim is moving by vehicle.
"""

import re
from datetime import datetime
from typing import Optional

from src.domain.entities import (
    Aggressor,
    Identity,
    LocationSample,
    MovementStatus,
    PanicAlert,
)
from src.app.services.movement import speed_kmh

CONTEXT_TYPE = "COPOM_ALERT_CONTEXT"
DEFAULT_RISK_LEVEL = "ALTO"
VEHICLE_NOTE = "NAO_CONFIRMADO"
UNKNOWN_MOVEMENT = "desconhecido"

STRICT_RULES = {
    "never_invent_data": True,
    "if_missing_say_unavailable": True,
    "do_not_claim_certainty": True,
    "privacy_first": True,
}


def mask_phone(phone: Optional[str]) -> Optional[str]:
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) < 8:
        return None
    return f"({digits[:2]}) ****-{digits[-4:]}"


def _aggressor_description(aggressor: Aggressor) -> Optional[str]:
    parts = [aggressor.relation_type, aggressor.relation_status]
    if aggressor.risk_level:
        parts.append(f"risco: {aggressor.risk_level}")
    parts = [p for p in parts if p]
    return ", ".join(parts) if parts else None


def build_emergency_context(
    alert: PanicAlert,
    identity: Identity,
    last_sample: Optional[LocationSample],
    movement: Optional[MovementStatus],
    aggressor: Optional[Aggressor] = None,
    share_code: Optional[str] = None,
    tracking_base_url: str = "",
    now: Optional[datetime] = None,
) -> dict:
    latitude = alert.latitude
    longitude = alert.longitude
    accuracy = None
    speed = None
    if last_sample is not None:
        latitude = last_sample.latitude
        longitude = last_sample.longitude
        accuracy = last_sample.accuracy_m
        if last_sample.speed is not None:
            speed = round(speed_kmh(last_sample.speed), 1)

    vehicle = {"model": None, "color": None, "plate_partial": None}
    if aggressor is not None and movement == MovementStatus.veiculo:
        vehicle = {
            "model": aggressor.vehicle_model,
            "color": aggressor.vehicle_color,
            "plate_partial": aggressor.vehicle_plate_partial,
        }

    monitoring_link = None
    if share_code:
        monitoring_link = f"{tracking_base_url.rstrip('/')}/{share_code}"

    risk_level = DEFAULT_RISK_LEVEL
    if aggressor is not None and aggressor.risk_level:
        risk_level = aggressor.risk_level.upper()

    timestamp = alert.created_at or now
    return {
        "type": CONTEXT_TYPE,
        "protocol_id": alert.protocol,
        "timestamp": timestamp.isoformat() if timestamp else None,
        "risk_level": risk_level,
        "trigger_reason": alert.trigger_type,
        "victim": {
            "internal_id": str(identity.id),
            "name": identity.full_name,
            "phone_masked": mask_phone(identity.phone),
        },
        "location": {
            "lat": latitude,
            "lng": longitude,
            "accuracy_m": accuracy,
            "movement_status": movement.value if movement else UNKNOWN_MOVEMENT,
            "speed_kmh": speed,
        },
        "monitoring_link": monitoring_link,
        "victim_aggressor_relation": aggressor.relation_type if aggressor else None,
        "aggressor": {
            "name_masked": aggressor.name_masked if aggressor else None,
            "description": _aggressor_description(aggressor) if aggressor else None,
            "vehicle": vehicle,
            "vehicle_note": VEHICLE_NOTE,
        },
        "strict_rules": dict(STRICT_RULES),
    }
