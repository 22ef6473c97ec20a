"""Cloudflare R2 object store (S3-compatible API via boto3)."""

import os
import logging

import boto3  # type: ignore[import-untyped]
from botocore.config import Config  # type: ignore[import-untyped]
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore[import-untyped]

from domain.model.errors import UpstreamError

logger = logging.getLogger(__name__)


class R2ObjectStore:
    """Stores uploaded files in an R2 bucket and returns their public URLs."""

    def __init__(
        self,
        account_id: str,
        access_key_id: str,
        secret_access_key: str,
        bucket_name: str,
        public_url: str,
    ):
        self.bucket_name = bucket_name
        self.public_url = public_url.rstrip('/')
        self._client = boto3.client(
            's3',
            endpoint_url=f'https://{account_id}.r2.cloudflarestorage.com',
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=Config(signature_version='s3v4'),
        )

    @classmethod
    def from_env(cls) -> 'R2ObjectStore':
        """Build from R2_* environment variables.

        Raises:
            ValueError: a required variable is missing
        """
        names = ('R2_ACCOUNT_ID', 'R2_ACCESS_KEY_ID', 'R2_SECRET_ACCESS_KEY', 'R2_BUCKET_NAME', 'R2_PUBLIC_URL')
        missing = [name for name in names if not os.getenv(name)]
        if missing:
            raise ValueError(f"Missing object store configuration: {', '.join(missing)}")
        return cls(
            account_id=os.environ['R2_ACCOUNT_ID'],
            access_key_id=os.environ['R2_ACCESS_KEY_ID'],
            secret_access_key=os.environ['R2_SECRET_ACCESS_KEY'],
            bucket_name=os.environ['R2_BUCKET_NAME'],
            public_url=os.environ['R2_PUBLIC_URL'],
        )

    def put(self, key: str, data: bytes, content_type: str, metadata: dict[str, str] | None = None) -> str:
        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type,
                Metadata=metadata or {},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Error uploading to R2", extra={"bucket": self.bucket_name, "key": key, "error": str(e)})
            raise UpstreamError(str(e)) from e

        logger.debug("Uploaded to R2", extra={"key": key, "bytes": len(data)})
        return f"{self.public_url}/{key}"

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("Error deleting from R2", extra={"bucket": self.bucket_name, "key": key, "error": str(e)})
            raise UpstreamError(str(e)) from e
