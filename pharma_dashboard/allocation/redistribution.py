"""
배분 벡터 재분배 (Redistributor)

한 차원의 값이 바뀌면 나머지 차원이 그 차이를 흡수하여
합계 100을 정확히 유지하는 새 벡터를 만듭니다.

모든 연산은 정수로 수행되어 같은 입력에 대해 항상 같은 결과를 냅니다:
- 비례 분배: floor(-delta * value / remaining_sum)
- 균등 분배: floor(-delta / count) (나머지 합이 0일 때)
- 잔여분: 선언 순서상 마지막 비변경 차원에 귀속
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import List, Sequence

from ..core.config import CONFIG, AllocationConfig
from ..domain.exceptions import InvalidIndex, MalformedVector
from ..domain.models import AllocationVector, Dimension
from ..domain.results import EngineResult, capture
from ..domain.validation import validate_index, validate_vector

logger = logging.getLogger(__name__)


def normalize_requested_value(
    requested_value: object,
    current_value: int,
    *,
    config: AllocationConfig | None = None,
) -> int:
    """
    요청 값을 [0, 100] 범위의 정수로 정규화합니다.

    범위를 벗어난 값은 오류가 아니라 슬라이더를 끝까지 끈 것으로 보고
    경계값으로 클램핑합니다. 값이 없거나(None/NaN) 숫자가 아니면
    현재 값을 그대로 사용합니다(변경 없음).

    Args:
        requested_value: 사용자가 요청한 값
        current_value: 변경 대상 차원의 현재 값
        config: 배분 설정

    Returns:
        클램핑 후 내림한 정수 값
    """
    cfg = config or CONFIG.allocation

    if isinstance(requested_value, bool) or not isinstance(
        requested_value, numbers.Real
    ):
        logger.debug(f"Requested value {requested_value!r} ignored; keeping current")
        return int(current_value)

    value = float(requested_value)
    if math.isnan(value):
        return int(current_value)

    value = max(float(cfg.min_value), min(value, float(cfg.max_value)))
    return int(math.floor(value))


def _proportional_adjustments(
    values: Sequence[int], others: Sequence[int], absorb: int
) -> List[int]:
    remaining_sum = sum(values[i] for i in others)

    if remaining_sum > 0:
        # 파이썬 정수 나눗셈(//)은 음수에서도 floor 의미를 가짐
        return [(absorb * values[i]) // remaining_sum for i in others]

    # 나머지 차원이 모두 0이면 균등 분배
    return [absorb // len(others)] * len(others)


def _settle_residual(
    result: List[int],
    others: Sequence[int],
    residual: int,
    cfg: AllocationConfig,
) -> None:
    """
    내림으로 생긴 잔여분을 마지막 비변경 차원부터 거꾸로 귀속시킵니다.

    마지막 차원이 경계에 막히면 남은 양은 그 앞 차원으로 넘어갑니다.
    """
    for i in reversed(others):
        if residual == 0:
            break
        if residual > 0:
            step = min(residual, cfg.max_value - result[i])
        else:
            step = max(residual, cfg.min_value - result[i])
        result[i] += step
        residual -= step

    if residual != 0:
        logger.error(f"Residual {residual} could not be settled")
        raise MalformedVector("배분 합계를 맞출 수 없습니다. 입력 값을 확인해 주세요.")


def rebalance(
    vector: AllocationVector,
    changed_index: int,
    requested_value: float,
    *,
    config: AllocationConfig | None = None,
) -> AllocationVector:
    """
    한 차원을 새 값으로 바꾸고 나머지 차원을 재분배합니다.

    처리 순서:
    1. 입력 벡터와 인덱스 검증
    2. 요청 값 클램핑 → v_new, delta = v_new - v_old
    3. 나머지 차원이 -delta를 현재 값에 비례하여 흡수
       (나머지 합이 0이면 균등하게 흡수)
    4. 선언 순서대로 적용하며 0 미만은 0으로 막고
       실현되지 못한 감소분은 다음 차원으로 이월
    5. 내림 잔여분은 마지막 비변경 차원에 귀속
    6. 새 벡터 반환 (입력 벡터는 변경하지 않음)

    Args:
        vector: 현재 배분 벡터 (합계 100)
        changed_index: 변경할 차원의 위치
        requested_value: 요청 값 (범위를 벗어나면 클램핑)
        config: 배분 설정 (기본값: CONFIG.allocation)

    Returns:
        합계가 정확히 100인 새 AllocationVector

    Raises:
        MalformedVector: 입력 벡터가 불변식을 위반한 경우
        InvalidIndex: changed_index가 범위를 벗어난 경우

    Examples:
        >>> mix = AllocationVector.from_mapping(
        ...     {"pmbok": 40, "agile": 20, "lean": 20, "design_thinking": 20}
        ... )
        >>> rebalance(mix, 0, 70).as_dict()
        {'pmbok': 70, 'agile': 10, 'lean': 10, 'design_thinking': 10}
    """
    cfg = config or CONFIG.allocation

    # ========================================
    # 1단계: 입력 검증
    # ========================================
    validate_vector(vector, config=cfg)
    idx = validate_index(vector, changed_index)

    values = [int(v) for v in vector.values]
    v_old = values[idx]

    # ========================================
    # 2단계: 요청 값 정규화
    # ========================================
    v_new = normalize_requested_value(requested_value, v_old, config=cfg)
    delta = v_new - v_old

    if delta == 0:
        return AllocationVector(
            tuple(Dimension(d.name, v) for d, v in zip(vector, values))
        )

    # ========================================
    # 3단계: 흡수량 계산 (비례 또는 균등)
    # ========================================
    others = [i for i in range(len(values)) if i != idx]
    adjustments = _proportional_adjustments(values, others, -delta)

    # ========================================
    # 4단계: 선언 순서대로 적용 (경계 클램핑 + 이월)
    # ========================================
    result = list(values)
    result[idx] = v_new
    carry = 0
    for i, adjustment in zip(others, adjustments):
        target = values[i] + adjustment + carry
        if target < cfg.min_value:
            carry = target - cfg.min_value
            target = cfg.min_value
        elif target > cfg.max_value:
            carry = target - cfg.max_value
            target = cfg.max_value
        else:
            carry = 0
        result[i] = target

    # ========================================
    # 5단계: 잔여분 귀속 (남은 이월분도 여기서 정산됨)
    # ========================================
    residual = cfg.total - sum(result)
    _settle_residual(result, others, residual, cfg)

    rebalanced = AllocationVector(
        tuple(Dimension(d.name, v) for d, v in zip(vector, result))
    )
    logger.debug(
        f"Rebalanced {vector.names[idx]} {v_old}->{v_new}: "
        f"{list(values)} -> {result}"
    )
    return rebalanced


def rebalance_by_name(
    vector: AllocationVector,
    name: str,
    requested_value: float,
    *,
    config: AllocationConfig | None = None,
) -> AllocationVector:
    """
    차원 이름으로 대상을 지정하여 재분배합니다.

    Raises:
        MalformedVector: 입력 벡터가 불변식을 위반한 경우
        InvalidIndex: 해당 이름의 차원이 없는 경우
    """
    cfg = config or CONFIG.allocation
    validate_vector(vector, config=cfg)

    try:
        idx = vector.index_of(name)
    except KeyError:
        logger.error(f"Unknown dimension name: {name!r}")
        raise InvalidIndex(f"'{name}' 항목을 찾을 수 없습니다.") from None

    return rebalance(vector, idx, requested_value, config=cfg)


def try_rebalance(
    vector: AllocationVector,
    changed_index: int,
    requested_value: float,
    *,
    config: AllocationConfig | None = None,
) -> EngineResult[AllocationVector]:
    """rebalance의 결과 값 버전. 도메인 예외를 EngineResult.error로 반환합니다."""
    return capture(rebalance, vector, changed_index, requested_value, config=config)
