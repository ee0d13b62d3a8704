"""
One-shot status messages carried across redirects in a cookie
"""
import base64
import binascii
import json
from typing import List, Optional

from fastapi import Request, Response

from app.core.config import get_settings
from app.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


def encode_messages(messages: List[str]) -> str:
    """Cookie-safe encoding of a message list"""
    raw = json.dumps(messages, ensure_ascii=False).encode("utf-8")
    # No '=' padding: cookie values containing '=' get quoted
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_messages(value: Optional[str]) -> List[str]:
    """Decode a cookie value; anything malformed decodes to no messages"""
    if not value:
        return []
    value = value.strip('"')
    padded = value + "=" * (-len(value) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError):
        logger.warning("Discarding malformed status message cookie")
        return []
    if not isinstance(data, list):
        return []
    return [str(item) for item in data]


class CookieNotifier:
    """
    Collects status messages during a request and stores them on the response

    Messages still pending from an earlier request are kept, so nothing is lost
    if two redirects happen before a page displays them.
    """

    def __init__(self, request: Request, cookie_name: Optional[str] = None):
        self.cookie_name = cookie_name or get_settings().flash_cookie_name
        self.pending = decode_messages(request.cookies.get(self.cookie_name))
        self.messages: List[str] = []

    def add_message(self, text: str) -> None:
        self.messages.append(text)

    def apply(self, response: Response) -> Response:
        """Write queued messages to the response cookie"""
        if self.messages:
            response.set_cookie(
                key=self.cookie_name,
                value=encode_messages(self.pending + self.messages),
                httponly=True,
                samesite="lax",
            )
        return response


def get_messages(request: Request, cookie_name: Optional[str] = None) -> List[str]:
    """Messages waiting to be displayed"""
    cookie_name = cookie_name or get_settings().flash_cookie_name
    return decode_messages(request.cookies.get(cookie_name))


def clear_messages(request: Request, response: Response, cookie_name: Optional[str] = None) -> Response:
    """Drop displayed messages so they show only once"""
    cookie_name = cookie_name or get_settings().flash_cookie_name
    if cookie_name in request.cookies:
        response.delete_cookie(key=cookie_name, httponly=True, samesite="lax")
    return response
