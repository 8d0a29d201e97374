"""
Transactional email over HTTP (Brevo-compatible JSON API).

Without an API key configured the service logs and skips delivery, which keeps
local runs and tests free of outbound traffic.
"""

import base64
from typing import Any, Optional

import httpx

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotificationDeliveryError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_notification_service import INotificationService


class EmailNotificationServiceImpl(INotificationService):
    def __init__(self, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.api_url = settings.EMAIL_API_URL
        self.api_key = settings.EMAIL_API_KEY.get_secret_value()
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self.sender = {
            'name': settings.EMAIL_SENDER_NAME,
            'email': settings.EMAIL_SENDER_ADDRESS,
        }
        self._transport = transport

    @Logger.io
    async def send_ticket_email(
        self,
        *,
        to_address: str,
        subject: str,
        body_text: str,
        qr_image: bytes,
        filename: str,
    ) -> None:
        payload = self._build_payload(to_address=to_address, subject=subject, body_text=body_text)
        payload['attachment'] = [
            {'content': base64.b64encode(qr_image).decode('ascii'), 'name': filename}
        ]
        await self._send(payload)

    @Logger.io
    async def send_plain_email(self, *, to_address: str, subject: str, body_text: str) -> None:
        payload = self._build_payload(to_address=to_address, subject=subject, body_text=body_text)
        await self._send(payload)

    def _build_payload(self, *, to_address: str, subject: str, body_text: str) -> dict[str, Any]:
        return {
            'sender': self.sender,
            'to': [{'email': to_address}],
            'subject': subject,
            'textContent': body_text,
        }

    async def _send(self, payload: dict[str, Any]) -> None:
        recipient = payload['to'][0]['email']
        if not self.api_key:
            Logger.base.warning(f'📭 [EMAIL] No API key configured, skipping mail to {recipient}')
            return

        headers = {
            'accept': 'application/json',
            'content-type': 'application/json',
            'api-key': self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(f'Email provider unreachable: {e}') from e

        if response.is_error:
            raise NotificationDeliveryError(
                f'Email provider rejected message ({response.status_code}): {response.text[:200]}'
            )

        Logger.base.info(f'📧 [EMAIL] Sent "{payload["subject"]}" to {recipient}')
