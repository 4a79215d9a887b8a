"""投稿（店舗レビュー）リポジトリ"""
import uuid
from dataclasses import replace
from typing import Optional

from ...geocoding.domain.models import KeywordSearchResult
from ...geocoding.providers.kakao_local_client import KakaoLocalClient
from ...posts.domain.enums import PostCategory
from ...posts.domain.models import GeoCoordinate, Post, PostBatch
from ...posts.services.aggregator import aggregate_posts
from ...posts.services.coordinate_range import DEFAULT_MAX_LATITUDE, calculate_bounding_box
from ...posts.services.image_encoder import ImageInput, encode_jpeg
from ...posts.services.query_builder import (
    REVIEWS_SUBCOLLECTION,
    build_area_filters,
    build_store_filters,
    document_path,
)
from ....shared.exceptions.errors import ConfigurationError, StorageError, UploadError
from ....shared.logging.config import get_logger
from ..clients.blob_storage_client import BlobStorageClient
from ..clients.firestore_client import FirestoreClient

logger = get_logger(__name__)


class PostRepository:
    """
    投稿データのリポジトリ

    保存先はFirestore（<カテゴリ>/<店名>/UserReviews/<投稿者UID>）、
    画像はCloud Storage、場所検索はKakao Local APIに委譲する。
    どの操作もリトライしない。
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        blob_storage: BlobStorageClient,
        keyword_search: Optional[KakaoLocalClient] = None,
        image_prefix: str = "postImages/",
        jpeg_quality: int = 80,
        max_latitude: float = DEFAULT_MAX_LATITUDE,
    ) -> None:
        """
        Args:
            firestore_client: Firestoreクライアント
            blob_storage: 画像保存用のストレージクライアント
            keyword_search: キーワード検索クライアント（Noneの場合は場所検索不可）
            image_prefix: 画像オブジェクトパスのプレフィックス
            jpeg_quality: 画像のJPEG品質
            max_latitude: 範囲検索で許容する中心緯度の絶対値の上限
        """
        self.client = firestore_client
        self.blob_storage = blob_storage
        self.keyword_search = keyword_search
        self.image_prefix = image_prefix
        self.jpeg_quality = jpeg_quality
        self.max_latitude = max_latitude
        logger.info("PostRepository initialized")

    def add_post(self, post: Post, image: ImageInput) -> Post:
        """
        画像をアップロードしてから投稿を保存

        Args:
            post: 投稿オブジェクト
            image: 投稿画像（バイト列またはPILのImage）

        Returns:
            Post: 画像URLを設定して保存した投稿

        Raises:
            ImageEncodingError: 画像をJPEGに変換できない場合
            UploadError: アップロードに失敗した場合
            StorageError: 投稿の書き込みに失敗した場合
        """
        path = document_path(post.category, post.store_name, post.author_uid)
        image_data = encode_jpeg(image, quality=self.jpeg_quality)

        object_path = f"{self.image_prefix}{uuid.uuid4()}.jpg"
        image_url = self.blob_storage.upload_bytes(
            object_path, image_data, content_type="image/jpeg"
        )

        saved = replace(post, post_image=image_url)
        try:
            self.client.set_document(path, saved.to_firestore_dict())
        except StorageError:
            # 書き込みに失敗した場合はアップロード済みの画像を消す
            self._discard_image(object_path)
            raise

        logger.info(f"Post created: {path} (image={object_path})")
        return saved

    def update_post(self, post: Post, category: PostCategory) -> None:
        """
        投稿を上書き保存（ドキュメント全体を置き換え）

        Args:
            post: 投稿オブジェクト
            category: 保存先のカテゴリ

        Raises:
            StorageError: 書き込みに失敗した場合
        """
        path = document_path(category, post.store_name, post.author_uid)
        self.client.set_document(path, post.to_firestore_dict(), merge=False)
        logger.info(f"Post updated: {path}")

    def delete_post(self, post: Post, category: PostCategory) -> None:
        """
        投稿を削除（存在しない場合も成功）

        Raises:
            StorageError: 削除に失敗した場合
        """
        path = document_path(category, post.store_name, post.author_uid)
        self.client.delete_document(path)
        logger.info(f"Post deleted: {path}")

    def fetch_posts_around_coordinate(
        self, category: PostCategory, center: GeoCoordinate, radius_km: float
    ) -> PostBatch:
        """
        中心座標の周辺（矩形範囲）にある投稿をカテゴリ別に取得

        Args:
            category: カテゴリ
            center: 地図の中心座標
            radius_km: 半径（km）

        Returns:
            PostBatch: デコードできた投稿と除外されたドキュメント

        Raises:
            ValidationError: 半径や中心座標が不正な場合
            StorageError: クエリに失敗した場合
        """
        box = calculate_bounding_box(center, radius_km, max_latitude=self.max_latitude)
        logger.debug(
            f"Querying {category.value} posts within {radius_km} km of "
            f"({center.latitude}, {center.longitude}): "
            f"SW={box.south_west.to_tuple()}, NE={box.north_east.to_tuple()}"
        )

        documents = self.client.query_collection_group(
            REVIEWS_SUBCOLLECTION, filters=build_area_filters(category, box)
        )
        batch = aggregate_posts(documents)

        # GeoPointの範囲条件は緯度優先の比較なので、経度はここで絞り込む
        batch.posts = [post for post in batch.posts if box.contains(post.location)]

        logger.info(
            f"Retrieved {len(batch.posts)} {category.value} posts around "
            f"({center.latitude}, {center.longitude})"
        )
        return batch

    def fetch_posts_store(self, store_name: str, category: PostCategory) -> PostBatch:
        """
        店舗のレビューを取得

        Raises:
            ValidationError: 店名が不正な場合
            StorageError: クエリに失敗した場合
        """
        documents = self.client.query_collection_group(
            REVIEWS_SUBCOLLECTION, filters=build_store_filters(category, store_name)
        )
        batch = aggregate_posts(documents)
        logger.info(f"Retrieved {len(batch.posts)} posts for store {category.value}/{store_name}")
        return batch

    def search_location(
        self, query: str, longitude: str, latitude: str, radius: int
    ) -> KeywordSearchResult:
        """
        キーワードで周辺の場所を検索（Kakao Local APIへの委譲）

        Raises:
            ConfigurationError: 検索クライアントが設定されていない場合
            GeocodingError: 検索に失敗した場合
        """
        if self.keyword_search is None:
            raise ConfigurationError("Keyword search is not configured")
        return self.keyword_search.search_keyword(query, longitude, latitude, radius)

    def _discard_image(self, object_path: str) -> None:
        """アップロード済みの画像を削除（失敗してもログのみ）"""
        try:
            self.blob_storage.delete(object_path)
            logger.info(f"Discarded orphaned image {object_path}")
        except UploadError as e:
            logger.error(f"Failed to discard orphaned image {object_path}: {e}")
