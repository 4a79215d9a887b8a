"""Firestoreクライアント"""
import os
from typing import Any, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ....shared.exceptions.errors import StorageError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

Filter = tuple[str, str, Any]


class FirestoreClient:
    """Firestore操作クライアント（ドキュメントはスラッシュ区切りのパスで指定）"""

    def __init__(self, project_id: str, database_id: str = "(default)") -> None:
        """
        Firestoreクライアントを初期化

        Args:
            project_id: GCPプロジェクトID
            database_id: データベースID（デフォルトは"(default)"）
        """
        self.project_id = project_id
        self.database_id = database_id

        emulator_host = os.environ.get("FIRESTORE_EMULATOR_HOST")

        try:
            self.client = firestore.Client(project=project_id, database=database_id)
        except Exception as e:
            raise StorageError(f"Failed to initialize Firestore client: {e}") from e

        if emulator_host:
            logger.info(
                f"Firestore client initialized (EMULATOR MODE): "
                f"host={emulator_host}, project={project_id}, database={database_id}"
            )
        else:
            logger.info(
                f"Firestore client initialized: project={project_id}, database={database_id}"
            )

    def get_document_reference(self, document_path: str) -> firestore.DocumentReference:
        """
        ドキュメント参照を取得

        Args:
            document_path: ドキュメントパス（例: "카페/스타벅스/UserReviews/<uid>"）
        """
        return self.client.document(document_path)

    def set_document(
        self, document_path: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        """
        ドキュメントを書き込む

        Args:
            document_path: ドキュメントパス
            data: 書き込む内容
            merge: Trueの場合は既存フィールドとマージ、Falseの場合は全体を置き換え

        Raises:
            StorageError: 書き込みに失敗した場合
        """
        try:
            self.get_document_reference(document_path).set(data, merge=merge)
            logger.debug(f"Document written: {document_path} (merge={merge})")
        except Exception as e:
            raise StorageError(f"Failed to write document {document_path}: {e}") from e

    def get_document(self, document_path: str) -> Optional[dict[str, Any]]:
        """
        ドキュメントを取得

        Returns:
            Optional[dict[str, Any]]: ドキュメントデータ（存在しない場合はNone）
        """
        try:
            doc = self.get_document_reference(document_path).get()
        except Exception as e:
            raise StorageError(f"Failed to get document {document_path}: {e}") from e

        if doc.exists:
            return doc.to_dict()
        return None

    def delete_document(self, document_path: str) -> None:
        """
        ドキュメントを削除

        存在しないドキュメントの削除もFirestore側では成功として扱われる。
        """
        try:
            self.get_document_reference(document_path).delete()
            logger.info(f"Document deleted: {document_path}")
        except Exception as e:
            raise StorageError(f"Failed to delete document {document_path}: {e}") from e

    def query_collection_group(
        self,
        collection_id: str,
        filters: Optional[list[Filter]] = None,
        limit: Optional[int] = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        """
        コレクショングループに対してクエリを実行する

        Args:
            collection_id: コレクショングループID（例: "UserReviews"）
            filters: フィルタ条件のリスト [(field, operator, value), ...]
            limit: 取得件数の上限

        Returns:
            list[tuple[str, dict[str, Any]]]: (ドキュメントパス, データ) のリスト

        Example:
            >>> client.query_collection_group(
            ...     "UserReviews",
            ...     filters=[("category", "==", "카페"), ("storeName", "==", "스타벅스")],
            ... )
        """
        try:
            query = self.client.collection_group(collection_id)

            for field, operator, value in filters or []:
                query = query.where(filter=FieldFilter(field, operator, value))

            if limit:
                query = query.limit(limit)

            return [
                (doc.reference.path, doc.to_dict())
                for doc in query.stream()
                if doc.exists
            ]

        except Exception as e:
            raise StorageError(
                f"Failed to query collection group {collection_id}: {e}"
            ) from e
