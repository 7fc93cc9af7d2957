import io
import logging
import random
import string
import time
from dataclasses import dataclass

from django.core.files.base import ContentFile
from PIL import Image, UnidentifiedImageError

from config.storage_backends import get_bucket_storage

logger = logging.getLogger(__name__)

SITE_IMAGES = 'site-images'
CONVENIOS = 'convenios'

ASPECT_PRESETS = {
    '16:9': 16 / 9,
    '4:3': 4 / 3,
    '1:1': 1.0,
}

FORMATS = {
    'JPEG': ('jpg', 'image/jpeg'),
    'PNG': ('png', 'image/png'),
}

_BASE36 = string.digits + string.ascii_lowercase


class ImagePipelineError(Exception):
    pass


@dataclass
class CropParams:
    """
    Crop box in pixels of the rotated source image.

    Zoom and pan happen in the browser cropper, which posts the resulting
    box already mapped onto the source pixels.
    """
    x: int
    y: int
    width: int
    height: int
    rotation: float = 0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Crop box must have a positive size")
        self.rotation = self.rotation % 360


def random_object_name(ext):
    suffix = ''.join(random.choice(_BASE36) for _ in range(10))
    return f"{int(time.time() * 1000)}-{suffix}.{ext}"


def crop_image(file, params, fmt='JPEG'):
    """Rotate, crop and re-encode an uploaded image; returns the encoded bytes."""
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format: {fmt}")

    if hasattr(file, 'seek'):
        file.seek(0)
    try:
        image = Image.open(file)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImagePipelineError(f"Imagem inválida: {e}")

    if params.rotation:
        # PIL rotates counter-clockwise
        image = image.rotate(-params.rotation, expand=True)

    box = (params.x, params.y, params.x + params.width, params.y + params.height)
    if params.x < 0 or params.y < 0 or box[2] > image.width or box[3] > image.height:
        raise ImagePipelineError("Área de recorte fora da imagem.")
    image = image.crop(box)

    buffer = io.BytesIO()
    if fmt == 'JPEG':
        image.convert('RGB').save(buffer, format='JPEG', quality=90)
    else:
        if image.mode not in ('RGB', 'RGBA'):
            image = image.convert('RGBA')
        image.save(buffer, format='PNG')
    return buffer.getvalue()


def upload_image(bucket, data, ext):
    """Store encoded image bytes under a fresh random name and return the public URL."""
    storage = get_bucket_storage(bucket)
    try:
        name = storage.save(random_object_name(ext), ContentFile(data))
        url = storage.url(name)
    except Exception as e:
        logger.error("Upload to %s failed: %s", bucket, e)
        raise ImagePipelineError(f"Erro ao enviar imagem: {e}")
    logger.info("Uploaded %s to %s", name, bucket)
    return url


def object_path(bucket, url):
    """Storage path of a public URL, or None if the URL is not in this bucket."""
    marker = f"/{get_bucket_storage(bucket).bucket_name}/"
    if not url or marker not in url:
        return None
    path = url.split(marker, 1)[1]
    return path or None


def delete_image(bucket, url):
    """Best-effort removal of a stored image. Returns True if a delete was issued."""
    path = object_path(bucket, url)
    if path is None:
        return False
    try:
        get_bucket_storage(bucket).delete(path)
    except Exception as e:
        logger.warning("Could not delete %s from %s: %s", path, bucket, e)
        return False
    return True


def replace_image(bucket, old_url, file, params, fmt='JPEG'):
    """Crop and upload a new image, then drop the old one. Returns the new URL."""
    ext = FORMATS[fmt][0]
    url = upload_image(bucket, crop_image(file, params, fmt), ext)
    if old_url:
        delete_image(bucket, old_url)
    return url
