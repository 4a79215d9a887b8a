"""投稿機能のEnum定義"""
from enum import Enum

from ....shared.exceptions.errors import ValidationError


class PostCategory(str, Enum):
    """
    投稿（レビュー）の業種カテゴリ

    値はFirestoreのトップレベルコレクション名としてそのまま使用される。
    """

    RESTAURANT = "음식점"
    CAFE = "카페"
    BEAUTY = "뷰티"
    HOBBY = "취미"
    EDUCATION = "교육"
    HOSPITAL = "병원"

    @classmethod
    def from_value(cls, value: "str | PostCategory") -> "PostCategory":
        """
        コレクション名またはメンバー名（大文字小文字を区別しない）から取得

        Raises:
            ValidationError: 未知のカテゴリの場合
        """
        if isinstance(value, cls):
            return value

        text = str(value).strip()
        try:
            return cls(text)
        except ValueError:
            pass

        member = cls.__members__.get(text.upper())
        if member is None:
            raise ValidationError(f"Invalid post category: {value}")
        return member
