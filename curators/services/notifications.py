import logging
import time
import requests
from django.conf import settings

logger = logging.getLogger(__name__)


def build_tip_notification(token, tipper_username, amount, track_title, recommendation_id) -> dict:
    return {
        "notificationId": f"tip-{int(time.time() * 1000)}",
        "title": "You received a tip! 💰",
        "body": f'@{tipper_username} tipped you ${amount} for "{track_title}"',
        "targetUrl": f"{settings.APP_BASE_URL}/track/{recommendation_id}",
        "tokens": [token],
    }


def send_tip_notification(token, tipper_username, amount, track_title, recommendation_id) -> bool:
    """
    Best effort push to the curator. Never raises, never retries.
    """
    notification_url = settings.FARCASTER_NOTIFICATION_URL
    if not notification_url or not token:
        logger.info("Tip notification skipped: no notification url or token")
        return False

    payload = build_tip_notification(token, tipper_username, amount, track_title, recommendation_id)

    try:
        response = requests.post(
            notification_url,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
            timeout=(3, 10),
        )
    except requests.RequestException as e:
        logger.error(
            "Failed to send tip notification",
            extra={"recommendation_id": str(recommendation_id), "error": str(e)},
        )
        return False

    if not response.ok:
        logger.warning(
            f"Tip notification rejected {response.status_code}",
            extra={"recommendation_id": str(recommendation_id)},
        )
        return False

    return True
