import attrs

from src.service.ticketing.app.interface.i_notification_service import INotificationService


@attrs.define
class SentEmail:
    to_address: str
    subject: str
    body_text: str
    attachment: bytes | None = None


class RecordingNotificationService(INotificationService):
    """Keeps every message in memory instead of calling the email provider."""

    def __init__(self) -> None:
        self.outbox: list[SentEmail] = []

    async def send_ticket_email(
        self,
        *,
        to_address: str,
        subject: str,
        body_text: str,
        qr_image: bytes,
        filename: str,
    ) -> None:
        self.outbox.append(SentEmail(to_address, subject, body_text, qr_image))

    async def send_plain_email(self, *, to_address: str, subject: str, body_text: str) -> None:
        self.outbox.append(SentEmail(to_address, subject, body_text))

    def sent_to(self, to_address: str) -> list[SentEmail]:
        return [email for email in self.outbox if email.to_address == to_address]
