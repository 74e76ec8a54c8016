import pytest

from core.models.errors import NotFoundError
from core.models.upload import BytesUpload
from handlers.get_image.service import GetService

from tests.samples import make_image_bytes


class TestGetService:
    def test_fetch_sniffs_content_type(self, local_storage) -> None:
        data = make_image_bytes("image/tiff")
        picture = local_storage.save(BytesUpload(filename="scan.bin", data=data))

        content, content_type = GetService(local_storage).fetch_picture(picture.destination)

        assert content == data
        assert content_type == "image/tiff"

    def test_fetch_missing(self, local_storage) -> None:
        with pytest.raises(NotFoundError):
            GetService(local_storage).fetch_picture("missing.png")

    def test_locate_does_not_require_the_picture(self, local_storage) -> None:
        url = GetService(local_storage).locate_picture("missing.png")

        assert url == local_storage.get_full_path("missing.png")
