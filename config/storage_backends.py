# config/storage_backends.py

from functools import lru_cache

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from storages.backends.s3boto3 import S3Boto3Storage


class SupabaseS3Storage(S3Boto3Storage):
    """
    Custom storage backend for Supabase S3-compatible storage.
    Fixes URL generation for public bucket access.
    """
    default_acl = None
    file_overwrite = False
    querystring_auth = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.project_ref = getattr(settings, 'SUPABASE_PROJECT_REF', '')

    def url(self, name, parameters=None, expire=None, http_method=None):
        """
        Generate correct public URL for Supabase storage.
        Format: https://{project_ref}.supabase.co/storage/v1/object/public/{bucket}/{path}
        """
        if not name:
            return ''

        name = str(name).lstrip('/')
        return f"https://{self.project_ref}.supabase.co/storage/v1/object/public/{self.bucket_name}/{name}"


class BucketFileSystemStorage(FileSystemStorage):
    """Local stand-in for a public bucket: MEDIA_ROOT/<bucket>/ served at MEDIA_URL<bucket>/."""

    def __init__(self, bucket_name, **kwargs):
        self.bucket_name = bucket_name
        super().__init__(
            location=settings.MEDIA_ROOT / bucket_name,
            base_url=f"{settings.MEDIA_URL}{bucket_name}/",
            **kwargs,
        )


@lru_cache(maxsize=None)
def get_bucket_storage(alias):
    """Return the storage for a configured public bucket ('site-images', 'convenios')."""
    try:
        bucket_name = settings.STORAGE_BUCKETS[alias]
    except KeyError:
        raise ValueError(f"Unknown storage bucket: {alias}")

    if settings.USE_SPACES:
        return SupabaseS3Storage(bucket_name=bucket_name)
    return BucketFileSystemStorage(bucket_name)
