"""Cloud Storage（Firebase Storage）クライアント"""
import uuid
from typing import Optional
from urllib.parse import quote

from google.cloud import storage

from ....shared.exceptions.errors import UploadError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

FIREBASE_DOWNLOAD_URL = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"
DOWNLOAD_TOKEN_METADATA_KEY = "firebaseStorageDownloadTokens"


class BlobStorageClient:
    """投稿画像などのバイナリをバケットに保存するクライアント"""

    def __init__(
        self,
        bucket_name: str,
        project_id: Optional[str] = None,
        client: Optional[storage.Client] = None,
    ) -> None:
        """
        Args:
            bucket_name: バケット名（例: dangle.appspot.com）
            project_id: GCPプロジェクトID
            client: 既存のstorage.Client（テスト時の差し替え用）
        """
        self.bucket_name = bucket_name

        try:
            self.client = client or storage.Client(project=project_id)
            self.bucket = self.client.bucket(bucket_name)
        except Exception as e:
            raise UploadError(f"Failed to initialize Cloud Storage client: {e}") from e

        logger.info(f"BlobStorageClient initialized: bucket={bucket_name}")

    def upload_bytes(
        self, object_path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        """
        バイト列をアップロードし、ダウンロードURLを返す

        URLはFirebase Storageのトークン付きダウンロードURL形式。

        Args:
            object_path: オブジェクトパス（例: postImages/<uuid>.jpg）
            data: 保存するバイト列
            content_type: Content-Type

        Returns:
            str: ダウンロードURL

        Raises:
            UploadError: アップロードに失敗した場合
        """
        token = str(uuid.uuid4())

        try:
            blob = self.bucket.blob(object_path)
            blob.metadata = {DOWNLOAD_TOKEN_METADATA_KEY: token}
            blob.upload_from_string(data, content_type=content_type)
        except Exception as e:
            raise UploadError(f"Failed to upload {object_path}: {e}") from e

        logger.info(f"Uploaded {len(data)} bytes to gs://{self.bucket_name}/{object_path}")
        return self.download_url(object_path, token)

    def download_url(self, object_path: str, token: str) -> str:
        """トークン付きダウンロードURLを組み立てる"""
        return FIREBASE_DOWNLOAD_URL.format(
            bucket=self.bucket_name,
            path=quote(object_path, safe=""),
            token=token,
        )

    def delete(self, object_path: str) -> None:
        """
        オブジェクトを削除

        Raises:
            UploadError: 削除に失敗した場合
        """
        try:
            self.bucket.blob(object_path).delete()
            logger.info(f"Deleted gs://{self.bucket_name}/{object_path}")
        except Exception as e:
            raise UploadError(f"Failed to delete {object_path}: {e}") from e
