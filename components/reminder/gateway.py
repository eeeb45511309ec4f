"""Outbound SMS delivery for payment reminders."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import structlog

from components.core.config import Settings
from components.core.errors import TransientDeliveryError

logger = structlog.get_logger(__name__)


class NotificationGateway(ABC):
    """Sends a text message to an address and reports whether it was delivered."""

    def __init__(self, provider: str, channel: str = "sms") -> None:
        self.provider = provider
        self.channel = channel

    @abstractmethod
    async def send(self, address: str, body: str) -> bool:
        ...

    async def aclose(self) -> None:
        pass


class LogOnlyGateway(NotificationGateway):
    """Used when no SMS provider is configured: logs the message and reports success."""

    def __init__(self) -> None:
        super().__init__("log-only")

    async def send(self, address: str, body: str) -> bool:
        logger.info("sms.mock_sent", provider=self.provider, to=address, body=body)
        return True


class TwilioSMSGateway(NotificationGateway):
    """Twilio Programmable Messaging over its REST API."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__("twilio")
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def messages_url(self) -> str:
        return f"{self._base_url}/Accounts/{self._account_sid}/Messages.json"

    async def _deliver(self, address: str, body: str) -> str:
        try:
            resp = await self._client.post(
                self.messages_url,
                data={"To": address, "From": self._from_number, "Body": body},
                auth=(self._account_sid, self._auth_token),
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransientDeliveryError(
                f"twilio rejected message: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransientDeliveryError(f"twilio request failed: {exc}") from exc
        try:
            payload = resp.json()
        except ValueError:
            return ""
        if not isinstance(payload, dict):
            return ""
        return str(payload.get("sid") or "")

    async def send(self, address: str, body: str) -> bool:
        try:
            sid = await self._deliver(address, body)
        except TransientDeliveryError as exc:
            logger.error("sms.failed", provider=self.provider, to=address, err=str(exc))
            return False
        logger.info("sms.sent", provider=self.provider, to=address, message_sid=sid)
        return True

    async def aclose(self) -> None:
        await self._client.aclose()


def build_gateway(settings: Settings) -> NotificationGateway:
    """Twilio when fully configured, log-only otherwise."""
    if settings.twilio_configured:
        logger.info("sms.gateway_configured", provider="twilio")
        return TwilioSMSGateway(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_PHONE_NUMBER,
            base_url=settings.TWILIO_API_URL,
            timeout=settings.SMS_TIMEOUT_SECONDS,
        )
    logger.warning("sms.gateway_mock_mode", reason="twilio credentials not configured")
    return LogOnlyGateway()
