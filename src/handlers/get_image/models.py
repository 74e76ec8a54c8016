from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)

from core.utils.naming import is_bare_key


class GetImageRequest(BaseModel):
    """Validation model for get picture request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    key: StrictStr = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Storage key returned by the upload endpoint",
    )

    url: StrictBool = Field(
        default=False,
        description="If true, return the public locator instead of the bytes.",
    )

    @field_validator("key")
    @classmethod
    def validate_key_is_file_name(cls, value: str) -> str:
        if not is_bare_key(value):
            raise ValueError("key must be a plain file name")
        return value


class ImageLocatorResponse(BaseModel):
    """Locator returned when the caller asks for a URL."""

    key: str
    url: str
