"""Post image validation and upload."""

import base64
import binascii
import hashlib
from abc import ABC, abstractmethod
from io import BytesIO

import logfire
from PIL import Image, UnidentifiedImageError

from bandlab.config import ImageSettings, StorageSettings, TimeoutSettings
from bandlab.domain.error import ValidationError
from bandlab.domain.value import ImageRef
from bandlab.domain.value.common import ValueObject

from .base import Service, bounded

_EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif", "WEBP": "webp"}


class ObjectStore(ABC):
    """Blob storage for post images."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under a key, replacing any existing object.

        Args:
            key: Object key
            data: Object body
            content_type: MIME type of the body

        Raises:
            StorageError: If the store rejected the write or was unreachable
        """
        pass


class DecodedImage(ValueObject):
    """An image payload that passed validation."""

    data: bytes
    format: str
    content_type: str

    @property
    def extension(self) -> str:
        """File extension matching the detected format."""
        return _EXTENSIONS.get(self.format, self.format.lower())

    @property
    def digest(self) -> str:
        """SHA-256 of the image bytes."""
        return hashlib.sha256(self.data).hexdigest()


class ImageService(Service):
    """Validates base64 image payloads and stores them content-addressed."""

    def __init__(
        self,
        object_store: ObjectStore,
        image_settings: ImageSettings,
        storage_settings: StorageSettings,
        timeouts: TimeoutSettings,
    ) -> None:
        """Initialize image service.

        Args:
            object_store: Blob storage for images
            image_settings: Accepted formats and size limit
            storage_settings: Bucket layout
            timeouts: Bounds for storage calls
        """
        self.object_store = object_store
        self.image_settings = image_settings
        self.storage_settings = storage_settings
        self.timeouts = timeouts

    def decode(self, payload: str | None) -> DecodedImage:
        """Decode and check a base64 image payload.

        Accepts bare base64 or a ``data:<mime>;base64,`` URL.

        Args:
            payload: Base64 encoded image

        Returns:
            The decoded image with its detected format

        Raises:
            ValidationError: If the payload is missing, not base64, too
                large, or not an image in an allowed format
        """
        if not payload:
            raise ValidationError("Image is required")

        if payload.startswith("data:"):
            _, _, payload = payload.partition(",")

        max_bytes = self.image_settings.max_bytes
        # Reject before decoding anything obviously too large
        if len(payload) > (max_bytes // 3 + 1) * 4:
            raise ValidationError(f"Image exceeds {max_bytes} bytes")

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError("Image must be base64 encoded") from e

        if not data:
            raise ValidationError("Image is required")
        if len(data) > max_bytes:
            raise ValidationError(f"Image exceeds {max_bytes} bytes")

        try:
            with Image.open(BytesIO(data)) as img:
                image_format = img.format
                img.verify()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as e:
            raise ValidationError("Image payload is not a valid image") from e

        if image_format not in self.image_settings.allowed_formats:
            raise ValidationError(
                f"Image format {image_format} is not supported; use one of "
                + ", ".join(self.image_settings.allowed_formats)
            )

        return DecodedImage(
            data=data,
            format=image_format,
            content_type=Image.MIME.get(image_format, "application/octet-stream"),
        )

    async def store(self, image: DecodedImage) -> ImageRef:
        """Upload an image under a key derived from its content.

        Args:
            image: A decoded image

        Returns:
            Reference to the stored object

        Raises:
            StorageError: If the upload failed or timed out
        """
        key = f"{self.storage_settings.image_prefix}/{image.digest}.{image.extension}"
        with logfire.span(
            "image_service.store",
            key=key,
            size=len(image.data),
            content_type=image.content_type,
        ):
            await bounded(
                self.object_store.put(key, image.data, image.content_type),
                self.timeouts.storage_seconds,
                "object_store.put",
            )
            logfire.info("Image stored", key=key)
            return ImageRef(key)
