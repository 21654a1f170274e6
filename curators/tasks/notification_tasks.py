import logging
from celery import shared_task
from curators.services.notifications import send_tip_notification

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True, max_retries=0)
def notify_curator_of_tip(token, tipper_username, amount, track_title, recommendation_id):
    delivered = send_tip_notification(
        token=token,
        tipper_username=tipper_username,
        amount=amount,
        track_title=track_title,
        recommendation_id=recommendation_id,
    )
    logger.info(f"Tip notification rec={recommendation_id} delivered={delivered}")
    return delivered
