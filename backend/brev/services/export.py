"""CSV metrics report and the places it can be delivered to."""

import csv
import io
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.responses import JSONResponse, Response

from ..config import Settings
from ..errors import ExportError
from ..models import Link

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"
CSV_HEADER = ["id", "code", "original_url", "clicks", "created_at"]

# Byte-order mark so spreadsheet software detects UTF-8
BOM = "\ufeff"


def render_links_csv(links: Iterable[Link]) -> str:
    """Render links as a CSV document, header row first"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=CSV_DELIMITER, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for link in links:
        writer.writerow([
            link.id,
            link.code,
            link.original_url,
            link.clicks or 0,
            link.created_at.isoformat() if link.created_at else "",
        ])
    return BOM + buffer.getvalue()


def report_filename() -> str:
    return f"report-{uuid.uuid4()}.csv"


class ExportTarget(ABC):
    """Where a rendered report ends up and how the caller gets to it."""

    @abstractmethod
    def deliver(self, content: str, filename: str) -> Response:
        ...


class LocalDownload(ExportTarget):
    """Send the report back as the response body."""

    def deliver(self, content: str, filename: str) -> Response:
        return Response(
            content=content.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )


class SignedRemoteUrl(ExportTarget):
    """Upload the report to S3 and hand out a presigned GET URL."""

    def __init__(self, client, bucket: str, expires_in: int = 600, key_prefix: str = ""):
        self.client = client
        self.bucket = bucket
        self.expires_in = expires_in
        self.key_prefix = key_prefix.strip("/")

    def object_key(self, filename: str) -> str:
        if self.key_prefix:
            return f"{self.key_prefix}/{filename}"
        return filename

    def deliver(self, content: str, filename: str) -> Response:
        key = self.object_key(filename)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content.encode("utf-8"),
                ContentType="text/csv",
            )
            file_url = self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise ExportError(f"Unable to upload report to s3://{self.bucket}/{key}") from e

        logger.info("Uploaded report to s3://%s/%s", self.bucket, key)
        return JSONResponse({"fileUrl": file_url})


def build_export_target(settings: Settings, client: Optional[object] = None) -> ExportTarget:
    """Pick the export target named by EXPORT_TARGET"""
    if settings.EXPORT_TARGET == "s3":
        if client is None:
            client = boto3.client(
                "s3",
                region_name=settings.AWS_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                endpoint_url=settings.AWS_ENDPOINT_URL,
                config=BotoConfig(signature_version="s3v4"),
            )
        return SignedRemoteUrl(
            client,
            bucket=settings.AWS_BUCKET_NAME,
            expires_in=settings.EXPORT_URL_EXPIRES_IN,
            key_prefix=settings.EXPORT_KEY_PREFIX,
        )
    return LocalDownload()
