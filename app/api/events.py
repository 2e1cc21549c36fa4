"""Real-time change stream for dashboards"""

from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
import structlog

from app.api.auth import decode_access_token
from app.models.user import UserRole

router = APIRouter()
logger = structlog.get_logger()


def _owner_of(payload: dict) -> Optional[str]:
    reservation = payload.get("reservation")
    if isinstance(reservation, dict):
        return reservation.get("customer_id")
    return payload.get("customer_id")


def visible_to(message: dict, user_id: str, role: str) -> bool:
    """Staff see every change; customers see slot changes and their own reservations."""
    if role == UserRole.STAFF.value:
        return True
    if not str(message.get("event", "")).startswith("reservation-"):
        return True
    return _owner_of(message.get("payload") or {}) == user_id


@router.websocket("/events")
async def stream_events(websocket: WebSocket, token: str = ""):
    """Push published changes the user may see as {"event", "payload"}"""
    payload = decode_access_token(token)
    if payload is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id, role = payload["sub"], payload.get("role")
    notifier = websocket.app.state.notifier
    queue = notifier.subscribe()
    logger.info("Event subscriber connected", user_id=user_id, role=role)

    try:
        await websocket.accept()
        while True:
            message = await queue.get()
            if visible_to(message, user_id, role):
                await websocket.send_json(message)
    except WebSocketDisconnect:
        logger.info("Event subscriber disconnected", user_id=user_id)
    finally:
        notifier.unsubscribe(queue)
