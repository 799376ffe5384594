# services/file_store.py

from datetime import datetime
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from core.config import settings
from core.errors import FileStoreError


class FileMeta(BaseModel):
    file_id: str                 # S3 object key
    name: str
    size_kb: float
    last_modified: Optional[datetime] = None


class FileStore:
    """Property photo storage (one S3 bucket per logical bucket id)."""

    def __init__(self, s3):
        self.s3 = s3

    def list_files(self, bucket: str) -> List[FileMeta]:
        files = []
        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket):
                for obj in page.get("Contents", []):
                    key = obj["Key"]
                    files.append(FileMeta(
                        file_id=key,
                        name=key.split("/")[-1],
                        size_kb=round(obj.get("Size", 0) / 1024, 2),
                        last_modified=obj.get("LastModified"),
                    ))
        except (ClientError, BotoCoreError) as e:
            raise FileStoreError(f"Error listing files in {bucket}: {e}") from e

        return sorted(files, key=lambda f: f.file_id)

    def get_file_view_url(self, bucket: str, file_id: str) -> str:
        try:
            return self.s3.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": bucket, "Key": file_id},
                ExpiresIn=settings.PHOTO_URL_EXPIRY_SECONDS,
            )
        except (ClientError, BotoCoreError) as e:
            raise FileStoreError(f"Error building URL for {file_id}: {e}") from e
