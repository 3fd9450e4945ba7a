"""
Booking Notification Service
Sends Expo push notifications for booking events
Failures are logged and reported in the result dict, never raised
"""

import logging
from typing import Optional

import httpx
from sqlalchemy.orm import Session

from .. import config
from ..domain.patients.repository import PatientRepository
from ..models import Booking

logger = logging.getLogger(__name__)


async def send_push(
    push_token: str,
    title: str,
    body: str,
    data: Optional[dict] = None,
) -> tuple[bool, Optional[str]]:
    """
    Send one push message via the Expo push API

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    payload = {"to": push_token, "title": title, "body": body, "data": data or {}}
    try:
        async with httpx.AsyncClient(timeout=config.PUSH_TIMEOUT_SECONDS) as client:
            response = await client.post(
                config.EXPO_PUSH_URL,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        if response.status_code >= 400:
            return False, f"Push API returned {response.status_code}: {response.text[:200]}"
        return True, None
    except httpx.HTTPError as e:
        return False, str(e)


async def send_booking_confirmation(db: Session, booking: Booking) -> dict:
    """
    Notify the patient that their booking is confirmed

    The patient is looked up by the booking's phone; nothing is sent when
    push is disabled or the patient has no stored push token.

    Returns:
        Dict with sent status and error (if any)
    """
    result = {"sent": False, "error": None}

    if not config.PUSH_NOTIFICATIONS_ENABLED:
        logger.debug("ℹ️ Push notifications disabled, skipping booking confirmation")
        result["error"] = "Push notifications disabled"
        return result

    try:
        patient = PatientRepository.get_by_phone(db, booking.patient_phone)
        if not patient or not patient.expo_push_token:
            logger.debug(f"⚠️ No push token for {booking.patient_phone}, skipping notification")
            result["error"] = "No push token"
            return result

        logger.info(f"📱 Sending booking confirmation push for {booking.booking_id}")
        success, error = await send_push(
            patient.expo_push_token,
            title="Booking Confirmed",
            body=f"Your booking with Dr. {booking.doctor_name} is confirmed!",
            data={"bookingId": booking.booking_id},
        )
        if success:
            result["sent"] = True
            logger.info(f"✅ Booking confirmation push sent for {booking.booking_id}")
        else:
            result["error"] = error
            logger.warning(f"⚠️ Booking confirmation push not sent for {booking.booking_id}: {error}")
    except Exception as e:
        result["error"] = str(e)
        logger.error(f"❌ Failed to send push notification for {booking.booking_id}: {e}")

    return result
