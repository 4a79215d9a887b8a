"""行政区域コードAPIクライアント"""
from typing import Optional

from ..domain.models import RegionCodeResponse
from ....shared.exceptions.errors import GeocodingError, HTTPError, ValidationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

REGION_CODE_URL = "https://grpc-proxy-server-mkvo6j4wsq-du.a.run.app/v1/regcodes"


class RegionCodeClient:
    """行政区域コード（시/구/동）の検索"""

    def __init__(
        self, http_client: Optional[HTTPClient] = None, base_url: str = REGION_CODE_URL
    ) -> None:
        self.http_client = http_client or HTTPClient()
        self.base_url = base_url

    def fetch_region_codes(
        self, pattern: str, is_ignore_zero: bool = True
    ) -> RegionCodeResponse:
        """
        コードパターンに一致する行政区域を取得

        Args:
            pattern: 区域コードのパターン（例: "11*000000" でソウルの区一覧）
            is_ignore_zero: 末尾が0の上位区域を除外するか

        Raises:
            ValidationError: パターンが空の場合
            GeocodingError: 取得に失敗した場合
        """
        if not pattern:
            raise ValidationError("Region code pattern is required")

        params = {
            "regcode_pattern": pattern,
            "is_ignore_zero": str(is_ignore_zero).lower(),
        }

        try:
            payload = self.http_client.get_json(self.base_url, params=params)
        except HTTPError as e:
            raise GeocodingError(f"Failed to fetch region codes for {pattern}: {e}") from e

        response = RegionCodeResponse.from_dict(payload)
        logger.debug(f"Region codes for {pattern}: {len(response.regcodes)}")
        return response
