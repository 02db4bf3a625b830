from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    """Location of an uploaded scan binary."""

    storage_path: str
    download_url: str


class BaseObjectStorage(ABC):
    """Contract for object storage adapters holding scan images."""

    @abstractmethod
    async def upload_scan_image(
        self,
        user_id: str,
        scan_id: str,
        local_uri: str,
    ) -> StoredImage:
        """Upload a local image to the path derived from (user_id, scan_id).

        Once this returns, the binary is retrievable at storage_path.

        Raises:
            StorageError: on any transport or storage failure.
        """
