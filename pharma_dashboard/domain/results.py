"""
엔진 호출 결과 래퍼

엔진의 순수 함수는 도메인 예외를 발생시키지만, UI 계층은
예외 처리 없이 실패를 값으로 다루고 싶어합니다.
EngineResult는 성공 값 또는 도메인 예외 중 하나만 담습니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .exceptions import DomainError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EngineResult(Generic[T]):
    """
    엔진 호출의 성공 값 또는 실패 사유.

    Attributes:
        value: 성공 시 결과 값 (실패 시 None)
        error: 실패 시 도메인 예외 (성공 시 None)

    Examples:
        >>> result = try_rebalance(mix, 0, 70)
        >>> if result.ok:
        ...     mix = result.value
        ... else:
        ...     logger.warning(result.message)
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return "" if self.error is None else str(self.error)

    def unwrap_or(self, fallback: T) -> T:
        """실패 시 fallback(마지막 정상 값)을 반환합니다."""
        if self.error is not None:
            return fallback
        return self.value  # type: ignore[return-value]


def capture(func: Callable[..., T], *args: object, **kwargs: object) -> EngineResult[T]:
    """
    함수를 호출하고 도메인 예외를 EngineResult로 변환합니다.

    도메인 예외가 아닌 예외(프로그래밍 오류)는 그대로 전파합니다.
    """
    try:
        return EngineResult(value=func(*args, **kwargs))
    except DomainError as exc:
        logger.info(f"{func.__name__} rejected input: {type(exc).__name__}: {exc}")
        return EngineResult(error=exc)
