"""
도메인 데이터 검증 로직

이 모듈은 엔진 진입 시점에 입력 데이터의 구조적 정합성을 검증합니다.
Streamlit 의존성이 없으며, 순수한 도메인 로직으로 동작합니다.

범위를 벗어난 숫자 입력은 여기서 다루지 않습니다(엔진이 정규화).
여기서는 형태, 개수, 합계 위반만 예외로 보고합니다.
"""

from __future__ import annotations

import logging
import numbers

from ..core.config import CONFIG, AllocationConfig, EquityConfig
from .exceptions import (
    DuplicateContributor,
    EmptyLedger,
    InvalidIndex,
    MalformedVector,
    NonPositivePool,
)
from .models import AllocationVector, ContributionLedger, is_finite_number

logger = logging.getLogger(__name__)


def _is_integral(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return is_finite_number(value) and float(value).is_integer()


def validate_vector(
    vector: object,
    *,
    config: AllocationConfig | None = None,
) -> None:
    """
    배분 벡터의 진입 불변식을 검증합니다.

    검증 항목:
    1. AllocationVector 인스턴스인지 확인
    2. 차원 수가 최소 개수(기본 2) 이상인지 확인
    3. 차원 이름이 중복되지 않는지 확인
    4. 모든 값이 0~100 범위의 정수인지 확인
    5. 합계가 100과 허용 오차(기본 0) 이내로 일치하는지 확인

    Args:
        vector: 검증할 벡터
        config: 배분 설정 (기본값: CONFIG.allocation)

    Raises:
        MalformedVector: 검증 실패 시 발생

    Examples:
        >>> validate_vector(AllocationVector.from_mapping({"a": 60, "b": 40}))
        # 검증 통과 (반환값 없음)

        >>> validate_vector(AllocationVector.from_mapping({"a": 60, "b": 30}))
        MalformedVector: 배분 합계가 100이 아닙니다...
    """
    cfg = config or CONFIG.allocation

    # ========================================
    # 1단계: 타입 및 차원 수 검증
    # ========================================
    if not isinstance(vector, AllocationVector):
        logger.error(f"Vector is not an AllocationVector: {type(vector)}")
        raise MalformedVector("배분 데이터가 손상되었습니다. 패널을 다시 불러와 주세요.")

    if len(vector) < cfg.min_dimensions:
        logger.error(f"Vector has too few dimensions: {len(vector)}")
        raise MalformedVector(
            f"배분 항목은 최소 {cfg.min_dimensions}개 이상이어야 합니다 (현재 {len(vector)}개)."
        )

    # ========================================
    # 2단계: 이름 중복 검증
    # ========================================
    seen: set[str] = set()
    duplicates: list[str] = []
    for name in vector.names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)

    if duplicates:
        logger.error(f"Duplicate dimension names: {duplicates}")
        raise MalformedVector("배분 항목 이름이 중복되었습니다: " + ", ".join(duplicates))

    # ========================================
    # 3단계: 값 범위/타입 검증
    # ========================================
    for dim in vector:
        if not _is_integral(dim.value):
            logger.error(f"Non-integer dimension value: {dim.name}={dim.value!r}")
            raise MalformedVector(f"'{dim.name}' 값이 정수가 아닙니다: {dim.value!r}")
        if not cfg.min_value <= dim.value <= cfg.max_value:
            logger.error(f"Dimension value out of range: {dim.name}={dim.value}")
            raise MalformedVector(
                f"'{dim.name}' 값이 {cfg.min_value}~{cfg.max_value} 범위를 벗어났습니다: {dim.value}"
            )

    # ========================================
    # 4단계: 합계 불변식 검증
    # ========================================
    total = int(sum(int(v) for v in vector.values))
    if abs(total - cfg.total) > cfg.sum_tolerance:
        logger.error(f"Vector total {total} != {cfg.total}")
        raise MalformedVector(f"배분 합계가 {cfg.total}이 아닙니다 (현재 {total}).")

    logger.debug("Allocation vector validation passed")


def validate_index(vector: AllocationVector, index: object) -> int:
    """
    변경 대상 인덱스를 검증하고 정수로 반환합니다.

    음수 인덱스는 뒤에서부터 세지 않고 범위 밖으로 취급합니다.

    Raises:
        InvalidIndex: 인덱스가 정수가 아니거나 범위를 벗어난 경우
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        logger.error(f"Index is not an integer: {index!r}")
        raise InvalidIndex(f"변경할 항목 위치가 올바르지 않습니다: {index!r}")

    idx = int(index)
    if not 0 <= idx < len(vector):
        logger.error(f"Index {idx} out of bounds for {len(vector)} dimensions")
        raise InvalidIndex(
            f"변경할 항목 위치({idx})가 범위(0~{len(vector) - 1})를 벗어났습니다."
        )
    return idx


def validate_ledger(ledger: object, *, config: EquityConfig | None = None) -> None:
    """
    기여 원장의 구조를 검증합니다.

    기여 비율 합계가 기준값(기본 100)이 아닌 것은 오류가 아닙니다(리포트에서 편차로 보고).

    Args:
        ledger: 검증할 ContributionLedger
        config: 형평성 설정 (기본값: CONFIG.equity)

    Raises:
        EmptyLedger: 원장이 비어 있거나 원장 타입이 아닌 경우
        DuplicateContributor: 같은 ID가 두 번 이상 등장하는 경우
    """
    if not isinstance(ledger, ContributionLedger) or len(ledger) == 0:
        logger.error("Ledger is empty or not a ContributionLedger")
        raise EmptyLedger("기여자 데이터가 없습니다. 파트너 목록을 확인해 주세요.")

    seen: set[str] = set()
    for cid in ledger.ids:
        if cid in seen:
            logger.error(f"Duplicate contributor id: {cid}")
            raise DuplicateContributor(f"기여자 ID가 중복되었습니다: {cid}")
        seen.add(cid)

    cfg = config or CONFIG.equity
    deviation = ledger.contribution_total - cfg.expected_contribution_total
    if abs(deviation) > 1e-9:
        logger.warning(
            f"Contribution total deviates from {cfg.expected_contribution_total:g} by "
            f"{deviation:+.2f}"
        )

    logger.debug("Ledger validation passed")


def validate_pool_total(total_value: object) -> float:
    """
    가치 풀 총액이 양수인지 검증하고 float으로 반환합니다.

    Raises:
        NonPositivePool: 총액이 0 이하이거나 유한한 숫자가 아닌 경우
    """
    if not is_finite_number(total_value) or total_value <= 0:
        logger.error(f"Non-positive pool total: {total_value!r}")
        raise NonPositivePool(
            f"가치 풀 총액이 0보다 커야 합니다 (현재 {total_value!r})."
        )
    return float(total_value)
