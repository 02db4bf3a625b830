import asyncio
from functools import partial
from pathlib import Path
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from dermascan.logging.logger import Log
from dermascan.scans.models import scan_image_path
from dermascan.storage.base import BaseObjectStorage, StoredImage
from dermascan.storage.exceptions import StorageError


class S3ObjectStorage(BaseObjectStorage):
    """Stores scan images in an S3 bucket.

    The boto3 client is blocking, so uploads run in the default executor.
    Download URLs point at ``public_base_url`` (a CDN in front of the bucket)
    when configured, otherwise at the bucket's virtual-hosted endpoint.
    """

    CONTENT_TYPE = "image/jpeg"

    def __init__(
        self,
        *,
        s3_client: Any,
        bucket: str,
        region: str,
        public_base_url: str = "",
    ) -> None:
        if not bucket:
            raise ValueError("s3_bucket is required for storage_engine=s3")
        self._s3 = s3_client
        self._bucket = bucket
        self._region = region
        self._public_base_url = public_base_url.rstrip("/")

    async def upload_scan_image(
        self,
        user_id: str,
        scan_id: str,
        local_uri: str,
    ) -> StoredImage:
        key = scan_image_path(user_id, scan_id)
        try:
            body = await asyncio.to_thread(Path(local_uri).read_bytes)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                partial(
                    self._s3.put_object,
                    Bucket=self._bucket,
                    Key=key,
                    Body=body,
                    ContentType=self.CONTENT_TYPE,
                    Metadata={"user_id": user_id, "scan_id": scan_id},
                ),
            )
        except (BotoCoreError, ClientError, OSError) as exc:
            raise StorageError(f"S3 upload of {key} failed: {exc}") from exc

        Log.info(f"Uploaded scan image to s3://{self._bucket}/{key} ({len(body)} bytes)")
        return StoredImage(storage_path=key, download_url=self._download_url(key))

    def _download_url(self, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"
