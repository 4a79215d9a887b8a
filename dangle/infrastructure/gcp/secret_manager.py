"""GCP Secret Manager連携（APIキーの取得）"""
from typing import Optional

from google.cloud import secretmanager

from ...shared.exceptions.errors import ConfigurationError
from ...shared.logging.config import get_logger

logger = get_logger(__name__)


class SecretManagerClient:
    """Secret Managerクライアント"""

    def __init__(self, project_id: str):
        """
        Args:
            project_id: GCPプロジェクトID
        """
        self.project_id = project_id
        self.client = secretmanager.SecretManagerServiceClient()

    def get_secret(self, secret_name: str, version: str = "latest") -> str:
        """
        シークレットの値を取得

        Args:
            secret_name: シークレット名
            version: バージョン（デフォルト: latest）

        Returns:
            シークレットの値（前後の空白は除去）

        Raises:
            ConfigurationError: シークレット取得失敗時
        """
        name = f"projects/{self.project_id}/secrets/{secret_name}/versions/{version}"
        try:
            logger.debug(f"Fetching secret: {name}")
            response = self.client.access_secret_version(request={"name": name})
            secret_value = response.payload.data.decode("UTF-8").strip()
        except Exception as e:
            logger.error(f"Failed to fetch secret {secret_name}: {e}")
            raise ConfigurationError(f"Failed to fetch secret {secret_name}: {e}") from e

        if not secret_value:
            raise ConfigurationError(f"Secret {secret_name} is empty")

        logger.info(f"Successfully fetched secret: {secret_name}")
        return secret_value

    def resolve(self, explicit_value: Optional[str], secret_name: str) -> str:
        """
        明示的な値があればそれを使い、なければSecret Managerから取得

        Args:
            explicit_value: 設定ファイル等で与えられた値
            secret_name: フォールバック先のシークレット名

        Raises:
            ConfigurationError: どちらからも取得できない場合
        """
        if explicit_value:
            return explicit_value
        return self.get_secret(secret_name)
