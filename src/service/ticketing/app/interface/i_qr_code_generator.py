from abc import ABC, abstractmethod


class IQrCodeGenerator(ABC):
    @abstractmethod
    def encode(self, *, payload: str, width: int, height: int) -> bytes:
        """
        Render `payload` as a PNG QR code of exactly width x height pixels.

        Raises:
            InvalidInputError: blank payload or non-positive size
        """
        pass

    def encode_group(self, *, transaction_group_id: str, width: int, height: int) -> bytes:
        return self.encode(payload=transaction_group_id, width=width, height=height)
