"""クエリ結果のドキュメントを投稿リストに集約する"""
from collections.abc import Iterable
from typing import Any

from ....shared.exceptions.errors import DecodeError
from ....shared.logging.config import get_logger
from ..domain.models import Post, PostBatch, SkippedDocument

logger = get_logger(__name__)


def aggregate_posts(documents: Iterable[tuple[str, Any]]) -> PostBatch:
    """
    (ドキュメントパス, データ) の列を投稿にデコードして集約する

    デコードに失敗したドキュメントは理由付きで skipped に記録し、
    残りの投稿だけを返す（部分的成功）。0件でも成功として空のバッチを返す。

    Args:
        documents: (パス, データ辞書) のイテラブル

    Returns:
        PostBatch: デコード済み投稿と除外されたドキュメント
    """
    batch = PostBatch()

    for path, data in documents:
        try:
            batch.posts.append(Post.from_firestore_dict(data))
        except DecodeError as e:
            logger.warning(f"Skipping undecodable post document {path}: {e}")
            batch.skipped.append(SkippedDocument(path=path, reason=str(e)))

    if batch.skipped:
        logger.info(
            f"Aggregated {batch.decoded_count} posts ({batch.skipped_count} skipped)"
        )
    return batch
