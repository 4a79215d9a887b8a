"""ユーザープロフィールのドメインモデル"""
from dataclasses import asdict, dataclass
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError


@dataclass
class UserInfo:
    """
    アカウントのプロフィール

    座標はプロフィールストアの形式に合わせて文字列のまま保持する。
    """

    email: str
    password: Optional[str] = None
    location: Optional[str] = None  # 居住地域名（例: "강남구"）
    nickname: Optional[str] = None
    longitude: Optional[str] = None
    latitude: Optional[str] = None

    def to_firestore_dict(self) -> dict[str, Any]:
        """Firestore保存用の辞書に変換"""
        return asdict(self)

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> "UserInfo":
        """
        Raises:
            DecodeError: emailが無い場合
        """
        email = data.get("email")
        if not email:
            raise DecodeError("UserInfo requires an email")

        def optional_str(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            email=str(email),
            password=optional_str("password"),
            location=optional_str("location"),
            nickname=optional_str("nickname"),
            longitude=optional_str("longitude"),
            latitude=optional_str("latitude"),
        )
