"""
파트너십 대시보드 패키지

제약 파트너십 프로젝트 대시보드에서 사용하는
배분 재조정 엔진과 형평성 점수 엔진을 제공합니다.
주요 구성:
- 도메인 모델과 검증 로직 (domain)
- 방법론 믹스 재분배 (allocation)
- 가치 풀 집계 및 형평성 평가 (equity)
- Streamlit 연동 어댑터 (ui)
"""

from __future__ import annotations

from .allocation import rebalance, rebalance_by_name, try_rebalance
from .equity import aggregate, compute_equity, try_compute_equity

__version__ = "1.0.0"

__all__ = [
    "rebalance",
    "rebalance_by_name",
    "try_rebalance",
    "aggregate",
    "compute_equity",
    "try_compute_equity",
]
