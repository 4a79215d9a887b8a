"""ユーザープロフィールリポジトリ"""
from typing import Optional

from ...users.domain.models import UserInfo
from ....shared.exceptions.errors import DecodeError, StorageError, ValidationError
from ....shared.logging.config import get_logger
from ..clients.firestore_client import FirestoreClient

logger = get_logger(__name__)


class UserInfoRepository:
    """ユーザープロフィールのリポジトリ（レコード単位で読み書き）"""

    COLLECTION_NAME = "users"

    def __init__(
        self, firestore_client: FirestoreClient, collection_name: Optional[str] = None
    ) -> None:
        """
        Args:
            firestore_client: Firestoreクライアント
            collection_name: コレクション名（Noneの場合は"users"）
        """
        self.client = firestore_client
        self.collection_name = collection_name or self.COLLECTION_NAME
        logger.info("UserInfoRepository initialized")

    def get_user_info(self, user_id: str) -> Optional[UserInfo]:
        """
        ユーザーIDでプロフィールを取得

        Returns:
            Optional[UserInfo]: プロフィール（存在しない場合はNone）

        Raises:
            StorageError: 取得に失敗した場合、または保存内容が不正な場合
        """
        data = self.client.get_document(self._path(user_id))
        if data is None:
            logger.info(f"No user info for {user_id}")
            return None

        try:
            return UserInfo.from_firestore_dict(data)
        except DecodeError as e:
            raise StorageError(f"Corrupted user info for {user_id}: {e}") from e

    def save_user_info(self, user_id: str, user_info: UserInfo) -> None:
        """
        プロフィールを保存（レコード全体を置き換え）

        Raises:
            ValidationError: emailが空の場合
            StorageError: 保存に失敗した場合
        """
        if not user_info.email:
            raise ValidationError("email is required")

        self.client.set_document(self._path(user_id), user_info.to_firestore_dict())
        logger.info(f"User info saved: {user_id}")

    def delete_user_info(self, user_id: str) -> None:
        """プロフィールを削除"""
        self.client.delete_document(self._path(user_id))
        logger.info(f"User info deleted: {user_id}")

    def _path(self, user_id: str) -> str:
        if not user_id or "/" in user_id:
            raise ValidationError(f"Invalid user id: {user_id!r}")
        return f"{self.collection_name}/{user_id}"
