from abc import ABC, abstractmethod


class INotificationService(ABC):
    @abstractmethod
    async def send_ticket_email(
        self,
        *,
        to_address: str,
        subject: str,
        body_text: str,
        qr_image: bytes,
        filename: str,
    ) -> None:
        """
        Raises:
            NotificationDeliveryError: the provider rejected or never received the message
        """
        pass

    @abstractmethod
    async def send_plain_email(self, *, to_address: str, subject: str, body_text: str) -> None:
        pass
