"""位置情報機能のドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ....shared.exceptions.errors import DecodeError


class AuthorizationStatus(str, Enum):
    """位置情報の利用許可状態"""

    NOT_DETERMINED = "not_determined"  # 未選択
    RESTRICTED = "restricted"  # 端末の制限により利用不可
    DENIED = "denied"  # 拒否
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def is_authorized(self) -> bool:
        return self in (
            AuthorizationStatus.AUTHORIZED_ALWAYS,
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        )


@dataclass
class UserLocationViewModel:
    """最後に確認したユーザーの位置（再起動後の表示用）"""

    location_name: str
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "location_name": self.location_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserLocationViewModel":
        try:
            return cls(
                location_name=str(data["location_name"]),
                latitude=float(data["latitude"]),
                longitude=float(data["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Invalid cached user location: {e}") from e
