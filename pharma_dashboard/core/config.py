"""Configuration and constants for the partnership dashboard engines.

배분 합계, 공정성 밴드, 공유 가치 등급 기준 등 전역 설정을 제공합니다.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


# ============================================================
# 방법론 설정
# ============================================================

# 방법론 믹스 패널의 기본 차원 (선언 순서가 재분배 순서)
DEFAULT_METHODOLOGIES: Tuple[str, ...] = ("pmbok", "agile", "lean", "design_thinking")

# 공유 가치 패널의 기본 차원
SHARED_VALUE_DIMENSIONS: Tuple[str, ...] = (
    "economic",
    "social",
    "environmental",
    "stakeholder",
    "innovation",
)


# ============================================================
# 엔진 설정
# ============================================================

@dataclass(frozen=True)
class AllocationConfig:
    """배분 벡터 재조정 관련 설정"""

    # 모든 배분 벡터가 유지해야 하는 합계
    total: int = 100

    # 차원 값 하한/상한
    min_value: int = 0
    max_value: int = 100

    # 입력 벡터 합계 허용 오차 (0이면 정확히 일치해야 함)
    sum_tolerance: int = 0

    # 재조정 가능한 최소 차원 수
    min_dimensions: int = 2


@dataclass(frozen=True)
class EquityConfig:
    """형평성 점수 관련 설정"""

    # 형평성 균형이 이 범위(양 끝 포함)를 벗어나면 재분배 권고
    fairness_band: Tuple[float, float] = (0.85, 1.15)

    # 형평성 균형 상한 (기여자 간 비교 가능하도록 제한)
    max_balance: float = 2.0

    # 기여 비율 합계의 기준값
    expected_contribution_total: float = 100.0


@dataclass(frozen=True)
class SharedValueConfig:
    """공유 가치 지수 등급 기준"""

    excellent_threshold: int = 85
    good_threshold: int = 70


@dataclass(frozen=True)
class DashboardConfig:
    """대시보드 전역 설정"""

    allocation: AllocationConfig = field(default_factory=AllocationConfig)
    equity: EquityConfig = field(default_factory=EquityConfig)
    shared_value: SharedValueConfig = field(default_factory=SharedValueConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = DashboardConfig()
