# core/s3_client.py

import boto3

from core.config import settings


def get_s3():
    """
    Get an S3 client for the photo bucket region.
    Raises RuntimeError if AWS credentials are missing.
    """
    key = settings.AWS_ACCESS_KEY_ID
    secret = settings.AWS_SECRET_ACCESS_KEY

    if not all([key, secret]):
        raise RuntimeError("Missing AWS credentials")

    return boto3.client(
        "s3",
        aws_access_key_id=key,
        aws_secret_access_key=secret,
        region_name=settings.AWS_REGION,
    )
