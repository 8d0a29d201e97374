import io

from PIL import Image
import pytest

from src.platform.exception.exceptions import InvalidInputError
from src.service.ticketing.driven_adapter.qr.qr_code_generator_impl import QrCodeGeneratorImpl


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


@pytest.fixture
def generator() -> QrCodeGeneratorImpl:
    return QrCodeGeneratorImpl()


@pytest.mark.unit
class TestQrCodeGenerator:
    @pytest.mark.parametrize('width,height', [(400, 400), (120, 80), (37, 1000)])
    def test_renders_png_of_requested_size(
        self, generator: QrCodeGeneratorImpl, width: int, height: int
    ) -> None:
        png = generator.encode(
            payload='0193c1a2-7e5b-7000-8000-000000000000', width=width, height=height
        )

        assert png.startswith(PNG_SIGNATURE)
        with Image.open(io.BytesIO(png)) as image:
            assert image.size == (width, height)

    def test_group_rendering_encodes_the_group_id(self, generator: QrCodeGeneratorImpl) -> None:
        by_group = generator.encode_group(transaction_group_id='group-1', width=200, height=200)
        by_payload = generator.encode(payload='group-1', width=200, height=200)

        assert by_group == by_payload

    def test_same_payload_renders_identically(self, generator: QrCodeGeneratorImpl) -> None:
        first = generator.encode(payload='abc', width=100, height=100)
        second = generator.encode(payload='abc', width=100, height=100)
        other = generator.encode(payload='abd', width=100, height=100)

        assert first == second
        assert first != other

    @pytest.mark.parametrize('payload', ['', '   '])
    def test_blank_payload_is_rejected(self, generator: QrCodeGeneratorImpl, payload: str) -> None:
        with pytest.raises(InvalidInputError):
            generator.encode(payload=payload, width=100, height=100)

    @pytest.mark.parametrize('width,height', [(0, 100), (100, -1)])
    def test_non_positive_size_is_rejected(
        self, generator: QrCodeGeneratorImpl, width: int, height: int
    ) -> None:
        with pytest.raises(InvalidInputError):
            generator.encode(payload='abc', width=width, height=height)

    @pytest.mark.parametrize('width,height', [(100000, 100000), (2001, 10), (10, 2001)])
    def test_oversized_render_is_rejected_before_allocating(
        self, generator: QrCodeGeneratorImpl, width: int, height: int
    ) -> None:
        with pytest.raises(InvalidInputError):
            generator.encode(payload='abc', width=width, height=height)

    def test_max_size_is_configurable(self) -> None:
        generator = QrCodeGeneratorImpl(max_size=64)

        png = generator.encode(payload='abc', width=64, height=64)

        assert png.startswith(PNG_SIGNATURE)
        with pytest.raises(InvalidInputError):
            generator.encode(payload='abc', width=65, height=64)
