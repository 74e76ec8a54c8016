import pytest
from pydantic import ValidationError as PydanticValidationError

from core.imaging.inspector import ImageInspection
from core.models.picture import PictureRequest, build_picture_request
from core.models.upload import BytesUpload


class TestBuildPictureRequest:
    def test_combines_upload_and_inspection(self) -> None:
        upload = BytesUpload(filename="cat.png", data=b"x" * 70)
        inspection = ImageInspection(content_type="image/png", width=2, height=2)

        picture = build_picture_request(
            upload=upload,
            destination="abc123.png",
            inspection=inspection,
        )

        assert picture.model_dump() == {
            "name": "cat.png",
            "destination": "abc123.png",
            "height": 2,
            "width": 2,
            "size": 70,
            "content_type": "image/png",
        }


class TestPictureRequest:
    def test_rejects_non_positive_dimensions(self) -> None:
        with pytest.raises(PydanticValidationError):
            PictureRequest(
                name="cat.png",
                destination="abc.png",
                height=0,
                width=2,
                size=10,
                content_type="image/png",
            )

    def test_rejects_empty_destination(self) -> None:
        with pytest.raises(PydanticValidationError):
            PictureRequest(
                name="cat.png",
                destination="",
                height=1,
                width=1,
                size=10,
                content_type="image/png",
            )

    @pytest.mark.parametrize("content_type", ["text/plain", "image/x-icon", ""])
    def test_rejects_unsupported_content_type(self, content_type: str) -> None:
        with pytest.raises(PydanticValidationError):
            PictureRequest(
                name="cat.png",
                destination="abc.png",
                height=1,
                width=1,
                size=10,
                content_type=content_type,
            )


class TestBytesUpload:
    def test_each_open_starts_at_zero(self) -> None:
        upload = BytesUpload(filename="a.png", data=b"abc")

        first = upload.open()
        first.read()

        assert upload.open().read() == b"abc"
        assert upload.size == 3
        assert upload.filename == "a.png"
