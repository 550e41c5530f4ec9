"""
세션 상태 관리

이 모듈은 Streamlit 세션 상태에 패널별 최신 배분 벡터와
형평성 리포트를 보관합니다.

엔진 호출이 실패하면 세션 값을 바꾸지 않고 마지막 정상 값을 유지합니다.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

import streamlit as st

from pharma_dashboard.allocation import try_rebalance
from pharma_dashboard.domain.models import (
    AllocationVector,
    ContributionLedger,
    EquityReport,
    ValuePool,
)
from pharma_dashboard.domain.results import EngineResult
from pharma_dashboard.equity import try_compute_equity

logger = logging.getLogger(__name__)

MIX_SESSION_PREFIX = "_mix_"
EQUITY_SESSION_KEY = "_equity_report"


def _mix_key(panel_key: str) -> str:
    return f"{MIX_SESSION_PREFIX}{panel_key}"


def get_mix(panel_key: str, default: AllocationVector) -> AllocationVector:
    """
    패널의 현재 배분 벡터를 반환합니다.

    세션에 값이 없으면 default로 초기화합니다.
    """
    key = _mix_key(panel_key)
    current = st.session_state.get(key)
    if isinstance(current, AllocationVector):
        return current

    st.session_state[key] = default
    return default


def apply_rebalance(
    panel_key: str,
    changed_index: int,
    requested_value: float,
    *,
    default: AllocationVector,
) -> EngineResult[AllocationVector]:
    """
    슬라이더 변경을 세션의 배분 벡터에 반영합니다.

    성공하면 새 벡터로 교체하고, 실패하면 기존 벡터를 그대로 둡니다.

    Args:
        panel_key: 패널(단계) 식별자
        changed_index: 변경된 차원 위치
        requested_value: 슬라이더 값
        default: 세션 값이 없을 때 사용할 초기 벡터

    Returns:
        EngineResult (실패 시 error 포함)

    Session State Keys:
        - _mix_<panel_key>: AllocationVector
    """
    current = get_mix(panel_key, default)
    result = try_rebalance(current, changed_index, requested_value)

    if result.ok:
        st.session_state[_mix_key(panel_key)] = result.value
    else:
        logger.warning(
            f"Keeping last mix for {panel_key}: {type(result.error).__name__}"
        )
    return result


def get_equity_report() -> Optional[EquityReport]:
    """마지막으로 계산된 형평성 리포트 (없으면 None)."""
    report = st.session_state.get(EQUITY_SESSION_KEY)
    if isinstance(report, EquityReport):
        return report
    return None


def refresh_equity(
    ledger: ContributionLedger,
    pool: Union[ValuePool, float],
    *,
    fairness_band: Optional[Tuple[float, float]] = None,
) -> EngineResult[EquityReport]:
    """
    기여자/풀 데이터가 바뀌었을 때 형평성 리포트를 다시 계산합니다.

    실패하면 이전 리포트를 그대로 둡니다.

    Session State Keys:
        - _equity_report: EquityReport
    """
    result = try_compute_equity(ledger, pool, fairness_band=fairness_band)

    if result.ok:
        st.session_state[EQUITY_SESSION_KEY] = result.value
    else:
        logger.warning(f"Keeping last equity report: {type(result.error).__name__}")
    return result
