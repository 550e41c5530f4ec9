"""
형평성 계층 퍼블릭 API

가치 풀 집계, 형평성 점수 계산, 공유 가치 지수를 재수출합니다.
"""

from __future__ import annotations

from .pool import aggregate
from .scoring import compute_equity, score_contributor, try_compute_equity
from .shared_value import (
    RATING_EXCELLENT,
    RATING_GOOD,
    RATING_LABELS,
    RATING_NEEDS_IMPROVEMENT,
    rate_metrics,
    rate_value,
    shared_value_index,
)

__all__ = [
    # 가치 풀
    "aggregate",
    # 형평성
    "compute_equity",
    "try_compute_equity",
    "score_contributor",
    # 공유 가치 지수
    "shared_value_index",
    "rate_value",
    "rate_metrics",
    "RATING_EXCELLENT",
    "RATING_GOOD",
    "RATING_NEEDS_IMPROVEMENT",
    "RATING_LABELS",
]
