import io
from typing import Optional

from PIL import Image
import qrcode
from qrcode.constants import ERROR_CORRECT_Q
from qrcode.image.pil import PilImage

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_qr_code_generator import IQrCodeGenerator


class QrCodeGeneratorImpl(IQrCodeGenerator):
    """
    PNG QR renderer.

    Error correction Q keeps roughly a quarter of the symbol recoverable, enough
    for a creased printout; the quiet zone is a single module so small renders
    still scan.
    """

    def __init__(
        self, *, box_size: int = 10, border: int = 1, max_size: Optional[int] = None
    ) -> None:
        self.box_size = box_size
        self.border = border
        self.max_size = max_size if max_size is not None else settings.QR_IMAGE_MAX_SIZE

    @Logger.io(truncate_content=True)
    def encode(self, *, payload: str, width: int, height: int) -> bytes:
        if not payload or not payload.strip():
            raise InvalidInputError('QR payload cannot be empty')
        if width <= 0 or height <= 0:
            raise InvalidInputError(f'QR size must be positive, got {width}x{height}')
        if width > self.max_size or height > self.max_size:
            raise InvalidInputError(
                f'QR size {width}x{height} exceeds the {self.max_size}px limit per side'
            )

        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECT_Q,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        qr_image = qr.make_image(image_factory=PilImage, fill_color='black', back_color='white')
        image = qr_image.get_image().convert('RGB')
        if image.size != (width, height):
            # NEAREST keeps module edges sharp
            image = image.resize((width, height), Image.Resampling.NEAREST)

        buffer = io.BytesIO()
        image.save(buffer, format='PNG')
        return buffer.getvalue()
