"""공유 가치 지수 모듈.

경제/사회/환경/이해관계자/혁신 차원 점수로부터
공유 가치 지수와 등급을 계산합니다.
"""

from __future__ import annotations

import logging
from typing import Mapping

from ..core.config import CONFIG, SHARED_VALUE_DIMENSIONS, SharedValueConfig

logger = logging.getLogger(__name__)

RATING_EXCELLENT = "excellent"
RATING_GOOD = "good"
RATING_NEEDS_IMPROVEMENT = "needs_improvement"

# 패널 배지에 표시할 라벨
RATING_LABELS = {
    RATING_EXCELLENT: "Excelente performance",
    RATING_GOOD: "Boa performance",
    RATING_NEEDS_IMPROVEMENT: "Necessita melhorias",
}


def shared_value_index(metrics: Mapping[str, float]) -> int:
    """차원 점수의 평균을 반올림한 공유 가치 지수를 반환합니다.

    Args:
        metrics: 차원명 → 점수 (0~100)

    Returns:
        0~100 정수 지수. 차원이 없으면 0.
    """
    if not metrics:
        return 0
    mean = sum(float(v) for v in metrics.values()) / len(metrics)
    # 0.5는 항상 올림 (내장 round의 은행가 반올림 대신)
    return int(mean + 0.5)


def rate_value(value: float, *, config: SharedValueConfig | None = None) -> str:
    """점수를 등급 문자열로 변환합니다."""
    cfg = config or CONFIG.shared_value
    if value >= cfg.excellent_threshold:
        return RATING_EXCELLENT
    if value >= cfg.good_threshold:
        return RATING_GOOD
    return RATING_NEEDS_IMPROVEMENT


def rate_metrics(
    metrics: Mapping[str, float], *, config: SharedValueConfig | None = None
) -> dict[str, str]:
    """차원별 점수를 각각 등급으로 변환합니다.

    결과는 패널의 기본 차원 순서(SHARED_VALUE_DIMENSIONS)를 따르고,
    그 외 차원은 입력 순서대로 뒤에 붙습니다.
    """
    known = [name for name in SHARED_VALUE_DIMENSIONS if name in metrics]
    extra = [name for name in metrics if name not in SHARED_VALUE_DIMENSIONS]
    return {name: rate_value(metrics[name], config=config) for name in known + extra}
