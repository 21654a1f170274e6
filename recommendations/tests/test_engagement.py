import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
import requests

from curators.models import CuratorProfile
from recommendations.models import CoSign, Tip


def url_for(recommendation, suffix=""):
    return f"/api/tracks/{recommendation.pk}/{suffix}"


def tip_payload(**overrides):
    payload = {
        "txHash": "0x" + "ab" * 32,
        "fromFid": 3003,
        "toFid": 1001,
        "requestedAmount": "2.20",
        "tipperUsername": "carol",
    }
    payload.update(overrides)
    return payload


# =========================================================
# CO-SIGNS
# =========================================================

@pytest.mark.django_db
def test_cosign_increments_count_and_score(api_client, recommendation):
    res = api_client.post(url_for(recommendation, "cosign/"), {"userFid": 2002}, format="json")

    assert res.status_code == 200
    assert res.data == {"success": True, "coSignCount": 1}

    recommendation.curator.refresh_from_db()
    assert recommendation.curator.curator_score == 1


@pytest.mark.django_db
def test_cosign_twice_is_rejected(api_client, recommendation):
    api_client.post(url_for(recommendation, "cosign/"), {"userFid": 2002}, format="json")

    res = api_client.post(url_for(recommendation, "cosign/"), {"userFid": 2002}, format="json")

    assert res.status_code == 400
    assert res.data == {"success": False, "error": "Already co-signed"}
    assert CoSign.objects.count() == 1


@pytest.mark.django_db
def test_cannot_cosign_own_track(api_client, recommendation):
    res = api_client.post(
        url_for(recommendation, "cosign/"),
        {"userFid": recommendation.curator_id},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "Cannot co-sign your own track"
    assert CoSign.objects.count() == 0


@pytest.mark.django_db
def test_cosign_unknown_recommendation(api_client, db):
    res = api_client.post(f"/api/tracks/{uuid.uuid4()}/cosign/", {"userFid": 2002}, format="json")

    assert res.status_code == 404


@pytest.mark.django_db
def test_cosign_check(api_client, recommendation):
    api_client.post(url_for(recommendation, "cosign/"), {"userFid": 2002}, format="json")

    res = api_client.get(url_for(recommendation, "cosign/check/"), {"userFid": 2002})
    assert res.data == {"success": True, "hasCoSigned": True, "coSignCount": 1}

    res = api_client.get(url_for(recommendation, "cosign/check/"), {"userFid": 4004})
    assert res.data["hasCoSigned"] is False


@pytest.mark.django_db
def test_cosign_check_requires_fid(api_client, recommendation):
    res = api_client.get(url_for(recommendation, "cosign/check/"))

    assert res.status_code == 400
    assert res.data["error"] == "Missing user FID"


@pytest.mark.django_db
def test_cosigners_list_resolves_profiles(api_client, recommendation, other_curator):
    api_client.post(url_for(recommendation, "cosign/"), {"userFid": other_curator.fid}, format="json")
    api_client.post(url_for(recommendation, "cosign/"), {"userFid": 9999}, format="json")

    res = api_client.get(url_for(recommendation, "cosigners/"))

    assert res.data["total"] == 2
    by_fid = {c["fid"]: c for c in res.data["cosigners"]}
    assert by_fid[other_curator.fid]["username"] == "bob"
    assert by_fid[9999]["username"] == "unknown"
    assert by_fid[9999]["pfpUrl"] is None


# =========================================================
# TIPS
# =========================================================

@pytest.mark.django_db
def test_tip_updates_totals_and_score(api_client, recommendation):
    res = api_client.post(url_for(recommendation, "tip/"), tip_payload(), format="json")

    assert res.status_code == 200
    assert res.data == {"success": True, "tipCount": 1, "totalTips": 2.2}

    tip = Tip.objects.get()
    assert tip.amount_usd == Decimal("2.2")
    assert tip.curator_fid == recommendation.curator_id
    assert tip.tipper_fid == 3003

    recommendation.curator.refresh_from_db()
    assert recommendation.curator.curator_score == 11
    assert CuratorProfile.objects.get(fid=3003).username == "carol"


@pytest.mark.django_db
def test_tips_accumulate(api_client, recommendation):
    api_client.post(url_for(recommendation, "tip/"), tip_payload(requestedAmount="1.5"), format="json")
    res = api_client.post(url_for(recommendation, "tip/"), tip_payload(requestedAmount="0.25"), format="json")

    assert res.data["tipCount"] == 2
    assert res.data["totalTips"] == 1.75

    recommendation.refresh_from_db()
    assert recommendation.total_tips_usd == Decimal("1.75")


@pytest.mark.django_db
def test_tip_with_mismatched_recipient_credits_curator(api_client, recommendation):
    res = api_client.post(url_for(recommendation, "tip/"), tip_payload(toFid=5555), format="json")

    assert res.status_code == 200
    assert Tip.objects.get().curator_fid == recommendation.curator_id


@pytest.mark.django_db
@pytest.mark.parametrize(
    "overrides",
    [
        {"txHash": "abc"},
        {"requestedAmount": "0"},
        {"requestedAmount": "-1"},
        {"requestedAmount": "10000.01"},
        {"fromFid": None},
    ],
)
def test_tip_validation(api_client, recommendation, overrides):
    res = api_client.post(url_for(recommendation, "tip/"), tip_payload(**overrides), format="json")

    assert res.status_code == 400
    assert Tip.objects.count() == 0


@pytest.mark.django_db
def test_self_tip_allowed_by_default(api_client, recommendation):
    res = api_client.post(
        url_for(recommendation, "tip/"),
        tip_payload(fromFid=recommendation.curator_id),
        format="json",
    )

    assert res.status_code == 200


@pytest.mark.django_db
def test_self_tip_rejected_when_disabled(api_client, recommendation, settings):
    settings.CURIO_ALLOW_SELF_TIP = False

    res = api_client.post(
        url_for(recommendation, "tip/"),
        tip_payload(fromFid=recommendation.curator_id),
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "Cannot tip your own track"


@pytest.mark.django_db
def test_tip_notifies_curator_after_commit(
    api_client, recommendation, settings, django_capture_on_commit_callbacks
):
    settings.FARCASTER_NOTIFICATION_URL = "https://api.warpcast.com/v1/frame-notifications"
    recommendation.curator.notification_token = "token-123"
    recommendation.curator.save()

    with patch("curators.services.notifications.requests.post") as post:
        post.return_value.ok = True
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.post(url_for(recommendation, "tip/"), tip_payload(), format="json")

    assert res.status_code == 200
    post.assert_called_once()
    payload = post.call_args.kwargs["json"]
    assert payload["tokens"] == ["token-123"]
    assert payload["body"] == '@carol tipped you $2.2 for "Never Gonna Give You Up"'
    assert payload["targetUrl"].endswith(f"/track/{recommendation.pk}")


@pytest.mark.django_db
def test_failed_notification_does_not_fail_tip(
    api_client, recommendation, settings, django_capture_on_commit_callbacks
):
    settings.FARCASTER_NOTIFICATION_URL = "https://api.warpcast.com/v1/frame-notifications"
    recommendation.curator.notification_token = "token-123"
    recommendation.curator.save()

    with patch(
        "curators.services.notifications.requests.post",
        side_effect=requests.ConnectionError("down"),
    ):
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.post(url_for(recommendation, "tip/"), tip_payload(), format="json")

    assert res.status_code == 200
    assert Tip.objects.count() == 1


@pytest.mark.django_db
def test_tippers_are_distinct(api_client, recommendation):
    api_client.post(url_for(recommendation, "tip/"), tip_payload(), format="json")
    api_client.post(url_for(recommendation, "tip/"), tip_payload(), format="json")
    api_client.post(url_for(recommendation, "tip/"), tip_payload(fromFid=4004, tipperUsername="dave"), format="json")

    res = api_client.get(url_for(recommendation, "tippers/"))

    assert res.data["total"] == 2
    assert {t["username"] for t in res.data["tippers"]} == {"carol", "dave"}


@pytest.mark.django_db
def test_legacy_tip_action_increments_count(api_client, recommendation):
    res = api_client.post(url_for(recommendation), {"action": "tip"}, format="json")

    assert res.status_code == 200
    assert res.data["track"]["tipCount"] == 1
    assert Tip.objects.count() == 0


@pytest.mark.django_db
def test_legacy_unknown_action(api_client, recommendation):
    res = api_client.post(url_for(recommendation), {"action": "like"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Invalid action"
