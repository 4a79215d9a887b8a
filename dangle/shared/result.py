"""単発の成功／失敗結果"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    非同期操作の結果（成功値またはエラーのどちらか一方）

    value と error が同時に設定されることはない。
    """

    value: Optional[T] = None
    error: Optional[Exception] = None

    def __post_init__(self) -> None:
        if self.value is not None and self.error is not None:
            raise ValueError("Result cannot hold both a value and an error")

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Optional[T]:
        """成功値を返す（失敗時は保持しているエラーを送出）"""
        if self.error is not None:
            raise self.error
        return self.value
