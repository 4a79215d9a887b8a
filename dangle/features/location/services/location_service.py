"""位置情報サービス（許可状態の確認と現在地の取得）"""
import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Optional

from ..domain.models import AuthorizationStatus
from ...posts.domain.models import GeoCoordinate
from ....shared.exceptions.errors import LocationAuthorizationError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class LocationProvider(ABC):
    """端末の位置情報機能の抽象"""

    @abstractmethod
    def services_enabled(self) -> bool:
        """端末の位置情報サービスが有効か"""
        pass

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus:
        """このアプリに対する現在の許可状態"""
        pass

    @abstractmethod
    def request_authorization(self) -> None:
        """利用許可を要求する（結果は handle_authorization_change で通知される）"""
        pass

    @abstractmethod
    def start_updates(self) -> None:
        pass

    @abstractmethod
    def stop_updates(self) -> None:
        pass


class LocationListener(ABC):
    """位置情報サービスからの通知先"""

    @abstractmethod
    def on_location(self, coordinate: GeoCoordinate) -> None:
        pass

    @abstractmethod
    def on_service_error(self, error: LocationAuthorizationError) -> None:
        pass

    @abstractmethod
    def on_disallowed(self) -> None:
        """位置情報が使えないため、設定画面への誘導が必要"""
        pass


class LocationService:
    """
    位置情報の許可フローと現在地の取得

    プロセス全体で共有せず、呼び出し側で生成して start()/stop() で管理する。
    loop を渡した場合、通知はそのイベントループ上で実行される。
    """

    def __init__(
        self,
        provider: LocationProvider,
        listener: LocationListener,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.provider = provider
        self.listener = listener
        self.loop = loop
        self.is_running = False
        self.last_location: Optional[GeoCoordinate] = None

    def start(self) -> None:
        """許可状態を確認し、許可されていれば位置の更新を開始する"""
        self.is_running = True
        logger.info("LocationService started")
        self.check_authorization()

    def stop(self) -> None:
        """位置の更新を停止する"""
        if self.is_running:
            self.provider.stop_updates()
        self.is_running = False
        logger.info("LocationService stopped")

    def check_authorization(self) -> None:
        """端末設定と許可状態に応じて分岐する"""
        if not self.is_running:
            return

        if not self.provider.services_enabled():
            logger.warning("Location services are disabled on this device")
            self._dispatch(self.listener.on_disallowed)
            return

        status = self.provider.authorization_status()
        logger.debug(f"Location authorization status: {status.value}")

        if status == AuthorizationStatus.NOT_DETERMINED:
            self.provider.request_authorization()
        elif status in (AuthorizationStatus.RESTRICTED, AuthorizationStatus.DENIED):
            error = LocationAuthorizationError(f"Location access is {status.value}")
            self._dispatch(self.listener.on_disallowed)
            self._dispatch(self.listener.on_service_error, error)
        elif status.is_authorized:
            self.provider.start_updates()

    def handle_authorization_change(self) -> None:
        """許可状態が変わったとき（初回起動・設定変更）に呼ばれる"""
        logger.info("Location authorization changed")
        self.check_authorization()

    def handle_locations(self, locations: Sequence[GeoCoordinate]) -> None:
        """
        位置の更新を受け取る

        最新の1件だけを通知し、以降の更新は停止する。
        """
        if not locations:
            return

        self.last_location = locations[-1]
        self._dispatch(self.listener.on_location, self.last_location)
        self.provider.stop_updates()

    def handle_failure(self, error: Exception) -> None:
        """GPSが使えない場所にいるなど、位置を取得できなかった場合"""
        logger.warning(f"Failed to acquire location: {error}")

    def _dispatch(self, callback: Callable[..., None], *args: object) -> None:
        if self.loop is not None:
            self.loop.call_soon_threadsafe(callback, *args)
        else:
            callback(*args)


def coordinate_to_string(coordinate: GeoCoordinate) -> str:
    """"<経度>,<緯度>" 形式の文字列に変換"""
    return f"{coordinate.longitude},{coordinate.latitude}"
