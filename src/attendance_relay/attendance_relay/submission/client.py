from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..common.validators import token_preview
from ..core.constants import (
    DEFAULT_ATTENDANCE_ENDPOINT,
    DEFAULT_ERP_ORIGIN,
    DEFAULT_ERP_REFERER,
    DEFAULT_USER_AGENT,
    SESSION_COOKIE_NAME,
)
from ..core.exceptions import RemoteRejectionError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErpEndpoint:
    url: str = DEFAULT_ATTENDANCE_ENDPOINT
    origin: str = DEFAULT_ERP_ORIGIN
    referer: str = DEFAULT_ERP_REFERER
    user_agent: str = DEFAULT_USER_AGENT


class AttendanceClient:
    """Sends one record-online-attendance request per call.

    No retries and no timeout: a stalled ERP stalls the caller.
    """

    def __init__(self, endpoint: Optional[ErpEndpoint] = None, *, session: Optional[requests.Session] = None):
        self._endpoint = endpoint or ErpEndpoint()
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> ErpEndpoint:
        return self._endpoint

    def build_headers(self, session_token: str) -> Dict[str, str]:
        return {
            "Accept": "application/json, text/plain, */*",
            "Content-Type": "application/json",
            "Cookie": f"{SESSION_COOKIE_NAME}={session_token}",
            "Origin": self._endpoint.origin,
            "Referer": self._endpoint.referer,
            "User-Agent": self._endpoint.user_agent,
        }

    @staticmethod
    def build_payload(target_identifier: str) -> Dict[str, Any]:
        return {"attendanceId": target_identifier}

    def submit(self, target_identifier: str, session_token: str) -> Any:
        """POST one attendance attempt and return the decoded response body.

        Raises TransportError when no response arrives and RemoteRejectionError
        on any non-2xx status.
        """
        logger.debug(
            "POST %s attendanceId=%s sid=%s",
            self._endpoint.url,
            target_identifier,
            token_preview(session_token),
        )

        try:
            response = self._session.post(
                self._endpoint.url,
                json=self.build_payload(target_identifier),
                headers=self.build_headers(session_token),
            )
        except requests.RequestException as e:
            logger.warning("Transport failure for sid=%s: %s", token_preview(session_token), e)
            raise TransportError(str(e) or e.__class__.__name__) from e
        except Exception as e:  # e.g. UnicodeEncodeError while encoding the Cookie header
            logger.warning("Request for sid=%s could not be sent: %s", token_preview(session_token), e.__class__.__name__)
            raise TransportError(f"Request could not be sent: {e.__class__.__name__}") from e

        if not 200 <= response.status_code < 300:
            raise RemoteRejectionError(response.status_code, _read_body_text(response))

        logger.debug("ERP answered %s for sid=%s", response.status_code, token_preview(session_token))
        try:
            return response.json()
        except ValueError:
            return _read_body_text(response)


def _read_body_text(response: requests.Response) -> str:
    try:
        return response.text or ""
    except Exception:  # best effort: an unreadable body reads as empty
        return ""


def describe_outcome(payload: Any) -> Optional[str]:
    """Pull the ERP result code out of a response body, when it has one.

    Bodies look like ``{"output": {"data": {"code": "SUCCESS", ...}, "errors": null}}``.
    Only ``output.data.code`` counts; an ``errors`` section on a 2xx body is ignored.
    """
    if not isinstance(payload, dict):
        return None
    output = payload.get("output")
    if not isinstance(output, dict):
        return None
    data = output.get("data")
    if isinstance(data, dict) and data.get("code"):
        return str(data["code"])
    return None
