"""가치 풀 집계 모듈.

카테고리별 가치를 합산하여 ValuePool을 만듭니다.
"""

from __future__ import annotations

import logging
from typing import Mapping

from ..domain.exceptions import NegativeCategoryValue
from ..domain.models import ValuePool, is_finite_number

logger = logging.getLogger(__name__)


def aggregate(categories: Mapping[str, float]) -> ValuePool:
    """카테고리별 값을 합산하여 가치 풀을 생성합니다.

    Args:
        categories: 카테고리명 → 값 (예: {"economic": 1250000, "social": 850000})

    Returns:
        총액과 카테고리 내역을 가진 ValuePool

    Raises:
        NegativeCategoryValue: 값이 음수이거나 유한한 숫자가 아닌 경우
    """
    total = 0.0
    for name, value in categories.items():
        if not is_finite_number(value) or value < 0:
            logger.error(f"Invalid category value: {name}={value!r}")
            raise NegativeCategoryValue(
                f"'{name}' 카테고리 값은 0 이상의 숫자여야 합니다: {value!r}"
            )
        total += float(value)

    return ValuePool(total_value=total, categories=dict(categories))
