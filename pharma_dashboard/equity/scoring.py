"""
형평성 점수 계산 (EquityScorer)

기여 원장과 가치 풀 총액으로부터 기여자별 형평성 균형과
전체 공정성 점수를 계산하고, 재분배가 필요한지 판단합니다.

기여자 i에 대해:
- expected_share = contribution_pct / 100
- value_received = 오버라이드 값 또는 total * expected_share
- actual_share = value_received / total
- equity_balance = clamp(actual_share / expected_share, 0, 2)
  (expected_share == 0 이면 1로 간주)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import pandas as pd

from ..core.config import CONFIG, EquityConfig
from ..domain.exceptions import EmptyLedger
from ..domain.models import (
    ContributionLedger,
    Contributor,
    ContributorEquity,
    EquityReport,
    ValuePool,
    is_finite_number,
)
from ..domain.results import EngineResult, capture
from ..domain.validation import validate_ledger, validate_pool_total

logger = logging.getLogger(__name__)

LedgerLike = Union[
    ContributionLedger,
    Iterable[Contributor],
    Iterable[Mapping[str, Any]],
    pd.DataFrame,
]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _clamp_pct(value: object) -> float:
    """0~100 범위로 정규화 (숫자가 아니면 0)."""
    if not is_finite_number(value):
        return 0.0
    return _clamp(float(value), 0.0, 100.0)


def _coerce_ledger(ledger: LedgerLike) -> ContributionLedger:
    if isinstance(ledger, ContributionLedger):
        return ledger
    if isinstance(ledger, pd.DataFrame):
        return ContributionLedger.from_records(ledger)
    if ledger is None:
        raise EmptyLedger("기여자 데이터가 없습니다. 파트너 목록을 확인해 주세요.")

    items = list(ledger)
    if items and all(isinstance(item, Contributor) for item in items):
        return ContributionLedger(tuple(items))
    return ContributionLedger.from_records(items)


def _resolve_band(
    fairness_band: Optional[Tuple[float, float]], cfg: EquityConfig
) -> Tuple[float, float]:
    low, high = fairness_band if fairness_band is not None else cfg.fairness_band
    if low > high:
        raise ValueError(f"fairness_band lower bound {low} exceeds upper bound {high}")
    return float(low), float(high)


def score_contributor(
    contributor: Contributor,
    total_value: float,
    band: Tuple[float, float],
    *,
    config: EquityConfig | None = None,
) -> ContributorEquity:
    """
    기여자 한 명의 형평성 균형을 계산합니다.

    Args:
        contributor: 평가할 기여자
        total_value: 가치 풀 총액 (양수, 호출 전에 검증됨)
        band: (하한, 상한) 공정성 밴드
        config: 형평성 설정

    Returns:
        ContributorEquity
    """
    cfg = config or CONFIG.equity

    expected_share = _clamp_pct(contributor.contribution_pct) / 100.0

    override = contributor.value_received
    if override is not None and is_finite_number(override):
        value_received = max(0.0, float(override))
        actual_share = value_received / total_value
    else:
        # 오버라이드가 없으면 선언 비율대로 받은 것으로 간주
        value_received = total_value * expected_share
        actual_share = expected_share

    if expected_share == 0:
        # 기여가 없는 기여자에게는 불공정할 수 없음
        equity_balance = 1.0
    else:
        equity_balance = _clamp(actual_share / expected_share, 0.0, cfg.max_balance)

    low, high = band
    return ContributorEquity(
        value_received=value_received,
        expected_share=expected_share,
        actual_share=actual_share,
        equity_balance=equity_balance,
        within_band=low <= equity_balance <= high,
    )


def _weighted_mean(values: Iterable[float], weights: Iterable[float]) -> float:
    pairs = list(zip(values, weights))
    weight_sum = sum(w for _, w in pairs)
    if weight_sum <= 0:
        return sum(v for v, _ in pairs) / len(pairs)
    return sum(v * w for v, w in pairs) / weight_sum


def compute_equity(
    ledger: LedgerLike,
    pool: Union[ValuePool, float],
    *,
    fairness_band: Optional[Tuple[float, float]] = None,
    config: EquityConfig | None = None,
) -> EquityReport:
    """
    기여 원장과 가치 풀로부터 형평성 리포트를 생성합니다.

    전체 점수는 각 기여자의 형평성 균형이 이상값 1에서 얼마나 떨어져 있는지를
    [0, 1]로 정규화한 뒤 기여 비율로 가중 평균한 값입니다.
    모든 기여자의 균형이 1이면 1.0, 멀어질수록 단조 감소합니다.

    Args:
        ledger: ContributionLedger, Contributor 목록, 레코드 목록 또는 데이터프레임
        pool: ValuePool 또는 총액 숫자
        fairness_band: (하한, 상한) 공정성 밴드 (기본값: CONFIG.equity.fairness_band)
        config: 형평성 설정 (기본값: CONFIG.equity)

    Returns:
        새 EquityReport

    Raises:
        EmptyLedger: 기여자가 한 명도 없는 경우
        DuplicateContributor: 기여자 ID가 중복된 경우
        MalformedLedger: 기여자 레코드의 숫자 필드를 해석할 수 없는 경우
        NonPositivePool: 풀 총액이 0 이하인 경우

    Examples:
        >>> report = compute_equity(ledger, 3_165_000)
        >>> report.redistribution_needed
        False
    """
    cfg = config or CONFIG.equity

    # ========================================
    # 1단계: 입력 검증
    # ========================================
    resolved = _coerce_ledger(ledger)
    validate_ledger(resolved, config=cfg)

    raw_total = pool.total_value if isinstance(pool, ValuePool) else pool
    total_value = validate_pool_total(raw_total)
    band = _resolve_band(fairness_band, cfg)

    # ========================================
    # 2단계: 기여자별 형평성 균형
    # ========================================
    per_contributor: Dict[str, ContributorEquity] = {}
    for contributor in resolved:
        per_contributor[contributor.id] = score_contributor(
            contributor, total_value, band, config=cfg
        )

    # ========================================
    # 3단계: 전체 점수 (이상값 1 기준 정규화 후 가중 평균)
    # ========================================
    span = max(1.0, cfg.max_balance - 1.0)
    weights = [_clamp_pct(c.contribution_pct) for c in resolved]
    closeness = [
        1.0 - min(1.0, abs(per_contributor[c.id].equity_balance - 1.0) / span)
        for c in resolved
    ]
    overall_score = _clamp(_weighted_mean(closeness, weights), 0.0, 1.0)

    satisfaction = [_clamp_pct(c.satisfaction_score) for c in resolved]
    average_satisfaction = _weighted_mean(satisfaction, weights)

    redistribution_needed = any(not eq.within_band for eq in per_contributor.values())

    contribution_total = resolved.contribution_total
    report = EquityReport(
        per_contributor=per_contributor,
        overall_score=overall_score,
        redistribution_needed=redistribution_needed,
        contribution_total=contribution_total,
        contribution_deviation=contribution_total - cfg.expected_contribution_total,
        average_satisfaction=average_satisfaction,
    )

    if redistribution_needed:
        logger.info(
            f"Redistribution advised: {list(report.out_of_band)} outside band {band}"
        )
    logger.debug(
        f"Equity computed for {len(resolved)} contributors: "
        f"overall={overall_score:.3f}"
    )
    return report


def try_compute_equity(
    ledger: LedgerLike,
    pool: Union[ValuePool, float],
    *,
    fairness_band: Optional[Tuple[float, float]] = None,
    config: EquityConfig | None = None,
) -> EngineResult[EquityReport]:
    """compute_equity의 결과 값 버전. 도메인 예외를 EngineResult.error로 반환합니다."""
    return capture(
        compute_equity, ledger, pool, fairness_band=fairness_band, config=config
    )
