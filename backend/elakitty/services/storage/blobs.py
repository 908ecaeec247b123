# backend/elakitty/services/storage/blobs.py
import io
import logging
import re
import time
import uuid
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from elakitty.config import settings
from elakitty.errors import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

SIGHTING_PHOTOS = "sightings"
SANCTUARY_LOGOS = "sanctuary-logos"
BUCKETS = (SIGHTING_PHOTOS, SANCTUARY_LOGOS)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    name = _UNSAFE.sub("_", Path(filename or "upload").name).strip("._")
    return name or "upload"


def check_image(data: bytes) -> str:
    """Return the image format (e.g. "JPEG"), or raise when the bytes are not an image."""
    if not data:
        raise ValidationError("empty upload")
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationError("upload too large")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            return img.format or "UNKNOWN"
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"upload is not an image: {e}")


class BlobStore:
    """Photo and logo attachments kept under a media directory served as static files."""

    def __init__(self, root=None, base_url=None):
        self.root = Path(root or settings.media_dir)
        self.base_url = (base_url if base_url is not None else settings.media_base_url).rstrip("/")

    def upload(self, bucket: str, filename: str, data: bytes) -> str:
        if bucket not in BUCKETS:
            raise ValidationError(f"unknown bucket: {bucket}")
        check_image(data)
        key = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}-{safe_filename(filename)}"
        target = self.root / bucket / key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # an existing key is never replaced
            with open(target, "xb") as fh:
                fh.write(data)
        except FileExistsError:
            logger.warning("Upload key %s already taken", target)
            raise ExternalServiceError(f"Upload failed: {key} already exists")
        except OSError as e:
            logger.warning("Upload to %s failed: %s", target, e)
            raise ExternalServiceError(f"Upload failed: {e}")
        logger.info("Stored %s/%s (%d bytes)", bucket, key, len(data))
        return f"{self.base_url}/{bucket}/{key}"


def get_blob_store() -> BlobStore:
    return BlobStore()
