import logging
import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class FarcasterAPIError(Exception):
    """Raised when a Farcaster Hub / Warpcast / Neynar call does not succeed"""

    def __init__(self, message, status_code=502):
        super().__init__(message)
        self.status_code = status_code


class NeynarNotConfigured(Exception):
    """Raised when a Neynar lookup is requested without NEYNAR_API_KEY"""


def _get_json(url, params=None, headers=None, source="Farcaster Hub"):
    try:
        response = requests.get(
            url,
            params=params,
            headers=headers,
            timeout=settings.FARCASTER_HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"{source} request failed", extra={"url": url, "error": str(e)})
        raise FarcasterAPIError(f"{source} unreachable") from e

    if not response.ok:
        logger.warning(
            f"{source} error {response.status_code}",
            extra={"url": url, "params": params, "response": response.text[:200]},
        )
        raise FarcasterAPIError(f"Failed to fetch from {source}", status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise FarcasterAPIError(f"{source} returned invalid JSON") from e


def get_verified_addresses(fid: int) -> list[str]:
    """
    Verified eth addresses for a fid, in Hub order (first = primary wallet).
    """
    data = _get_json(
        f"{settings.FARCASTER_HUB_URL}/v1/verificationsByFid",
        params={"fid": fid},
    )

    addresses = []
    for message in data.get("messages") or []:
        body = (message.get("data") or {})
        verification = body.get("verificationAddBody") or body.get("verificationAddEthAddressBody") or {}
        address = verification.get("address")
        if address:
            addresses.append(address)
    return addresses


def get_neynar_addresses(fid: int) -> list[str]:
    """
    Verified addresses from Neynar, custody address last.
    """
    if not settings.NEYNAR_API_KEY:
        raise NeynarNotConfigured("NEYNAR_API_KEY is not set")

    data = _get_json(
        "https://api.neynar.com/v2/farcaster/user/bulk",
        params={"fids": fid},
        headers={"accept": "application/json", "api_key": settings.NEYNAR_API_KEY},
        source="Neynar",
    )

    addresses = []
    users = data.get("users") or []
    if users:
        user = users[0]
        addresses.extend((user.get("verified_addresses") or {}).get("eth_addresses") or [])
        if user.get("custody_address"):
            addresses.append(user["custody_address"])
    return addresses


def lookup_addresses(fid: int) -> list[str]:
    if settings.NEYNAR_API_KEY:
        return get_neynar_addresses(fid)
    return get_verified_addresses(fid)


def get_pfp_url(fid: int) -> str | None:
    data = _get_json(
        f"{settings.WARPCAST_API_URL}/user-by-fid",
        params={"fid": fid},
        source="Warpcast",
    )
    return (((data.get("result") or {}).get("user") or {}).get("pfp") or {}).get("url")
