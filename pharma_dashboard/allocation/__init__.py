"""
배분 계층 퍼블릭 API

방법론 믹스 재분배 엔진과 단계 구성 헬퍼를 재수출합니다.
"""

from __future__ import annotations

from .methodology import (
    GOVERNANCE_LEVELS,
    PhaseConfiguration,
    default_phases,
    overall_methodology_mix,
    update_phase_methodology,
)
from .redistribution import (
    normalize_requested_value,
    rebalance,
    rebalance_by_name,
    try_rebalance,
)

__all__ = [
    # 재분배
    "rebalance",
    "rebalance_by_name",
    "try_rebalance",
    "normalize_requested_value",
    # 방법론 단계
    "GOVERNANCE_LEVELS",
    "PhaseConfiguration",
    "default_phases",
    "update_phase_methodology",
    "overall_methodology_mix",
]
