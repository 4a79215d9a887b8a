"""アプリケーションコンテナ（依存性注入）"""
from typing import Optional

from ...infrastructure.config.settings import Settings
from ...infrastructure.gcp.secret_manager import SecretManagerClient
from ...shared.exceptions.errors import ConfigurationError
from ...shared.http.client import HTTPClient
from ...shared.logging.config import get_logger
from ..events.repositories.local_event_repository import LocalEventRepository
from ..geocoding.providers.kakao_local_client import KakaoLocalClient
from ..geocoding.providers.region_code_client import RegionCodeClient
from ..location.cache.user_location_cache import UserLocationCache
from ..posts.services.post_service import PostService
from ..storage.clients.blob_storage_client import BlobStorageClient
from ..storage.clients.firestore_client import FirestoreClient
from ..storage.repositories.post_repository import PostRepository
from ..storage.repositories.user_info_repository import UserInfoRepository

logger = get_logger(__name__)


class AppContainer:
    """
    各Featureのクライアント・リポジトリを生成して束ねる

    APIキーは設定値を優先し、開発環境以外ではSecret Managerにフォールバックする。
    """

    def __init__(self, settings: Settings) -> None:
        """
        Args:
            settings: アプリケーション設定
        """
        self.settings = settings

        self.secret_manager: Optional[SecretManagerClient] = None
        if not settings.is_development:
            self.secret_manager = SecretManagerClient(settings.gcp_project_id)

        self.http_client = HTTPClient(
            timeout=settings.http_timeout,
            max_retries=settings.http_retry,
        )

        self.firestore_client = FirestoreClient(
            project_id=settings.gcp_project_id,
            database_id=settings.firestore_database_id,
        )
        self.blob_storage = BlobStorageClient(
            bucket_name=settings.storage_bucket_name,
            project_id=settings.gcp_project_id,
        )

        self.keyword_search = self._create_keyword_search()
        self.region_codes = RegionCodeClient(
            http_client=self.http_client, base_url=settings.region_code_url
        )

        self.post_repository = PostRepository(
            firestore_client=self.firestore_client,
            blob_storage=self.blob_storage,
            keyword_search=self.keyword_search,
            image_prefix=settings.post_image_prefix,
            jpeg_quality=settings.post_image_jpeg_quality,
            max_latitude=settings.max_query_latitude,
        )
        self.post_service = PostService(self.post_repository)
        self.user_info_repository = UserInfoRepository(
            self.firestore_client, collection_name=settings.firestore_users_collection
        )
        self.user_location_cache = UserLocationCache(settings.user_location_cache_path)

        self._local_event_repository: Optional[LocalEventRepository] = None

        logger.info("AppContainer initialized")

    @property
    def local_event_repository(self) -> LocalEventRepository:
        """地域イベントリポジトリ（初回アクセス時にAPIキーを解決）"""
        if self._local_event_repository is None:
            api_key = self._resolve_key(
                self.settings.seoul_open_api_key,
                self.settings.seoul_open_api_key_secret_name,
            )
            if not api_key:
                raise ConfigurationError("Seoul open API key is not configured")

            self._local_event_repository = LocalEventRepository(
                api_key=api_key,
                http_client=self.http_client,
                base_url=self.settings.seoul_open_api_base_url,
                page_size=self.settings.event_feed_page_size,
            )
        return self._local_event_repository

    def close(self) -> None:
        self.http_client.close()

    def _create_keyword_search(self) -> Optional[KakaoLocalClient]:
        """
        キーワード検索クライアントを作成

        Returns:
            Optional[KakaoLocalClient]: APIキーが無い場合はNone（場所検索は無効）
        """
        api_key = self._resolve_key(
            self.settings.kakao_rest_api_key,
            self.settings.kakao_rest_api_key_secret_name,
        )
        if not api_key:
            logger.warning("Kakao REST API key not available; place search disabled")
            return None

        return KakaoLocalClient(
            rest_api_key=api_key,
            http_client=self.http_client,
            keyword_search_url=self.settings.kakao_keyword_search_url,
        )

    def _resolve_key(self, explicit_value: Optional[str], secret_name: str) -> Optional[str]:
        if explicit_value or self.secret_manager is None:
            return explicit_value

        try:
            return self.secret_manager.resolve(explicit_value, secret_name)
        except ConfigurationError as e:
            logger.error(f"Failed to resolve secret {secret_name}: {e}")
            return None
