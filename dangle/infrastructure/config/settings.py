"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="dangle",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # GCP / Firebase
    gcp_project_id: str = Field(
        ...,
        description="GCP（Firebase）プロジェクトID",
    )

    # Firestore
    firestore_database_id: str = Field(
        default="(default)",
        description="FirestoreデータベースID",
    )
    firestore_emulator_host: Optional[str] = Field(
        default=None,
        description="Firestoreエミュレータのホスト（例: localhost:8080）",
    )
    firestore_users_collection: str = Field(
        default="users",
        description="ユーザープロフィールのコレクション名",
    )

    # Cloud Storage（Firebase Storage）
    storage_bucket_name: str = Field(
        ...,
        description="投稿画像を保存するバケット名（例: dangle.appspot.com）",
    )
    post_image_prefix: str = Field(
        default="postImages/",
        description="投稿画像のオブジェクトパスのプレフィックス",
    )
    post_image_jpeg_quality: int = Field(
        default=80,
        ge=1,
        le=95,
        description="投稿画像のJPEG品質",
    )

    # Kakao Local API
    kakao_rest_api_key: Optional[str] = Field(
        default=None,
        description="Kakao REST API Key（ローカル開発用）",
    )
    kakao_rest_api_key_secret_name: str = Field(
        default="kakao-rest-api-key",
        description="Kakao REST API KeyのSecret Manager名",
    )
    kakao_keyword_search_url: str = Field(
        default="https://dapi.kakao.com/v2/local/search/keyword.json",
        description="Kakaoキーワード検索APIのURL",
    )
    region_code_url: str = Field(
        default="https://grpc-proxy-server-mkvo6j4wsq-du.a.run.app/v1/regcodes",
        description="行政区域コードAPIのURL",
    )

    # Seoul Open Data API
    seoul_open_api_key: Optional[str] = Field(
        default=None,
        description="ソウル市オープンデータAPIキー（ローカル開発用）",
    )
    seoul_open_api_key_secret_name: str = Field(
        default="seoul-open-api-key",
        description="ソウル市オープンデータAPIキーのSecret Manager名",
    )
    seoul_open_api_base_url: str = Field(
        default="http://openapi.seoul.go.kr:8088",
        description="ソウル市オープンデータAPIのベースURL",
    )
    event_feed_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="イベントフィードの1回あたりの取得件数",
    )

    # HTTP
    http_timeout: int = Field(
        default=10,
        description="外部APIのタイムアウト（秒）",
    )
    http_retry: int = Field(
        default=0,
        ge=0,
        description="外部APIのリトライ回数（0: リトライしない）",
    )

    # Location
    user_location_cache_path: str = Field(
        default=".dangle/user_location.json",
        description="最後のユーザー位置を保存するキャッシュファイル",
    )
    max_query_latitude: float = Field(
        default=85.0,
        gt=0,
        lt=90,
        description="範囲検索で許容する中心緯度の絶対値の上限",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )

    # HTTP server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """開発環境かどうか"""
        return self.environment.lower() == "development"
