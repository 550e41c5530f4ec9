"""
도메인 모델: 배분 엔진과 형평성 엔진의 핵심 데이터 구조

이 모듈은 방법론 믹스 패널과 가치 분배 패널에서 사용하는 데이터 모델을 정의합니다.
모든 모델은 불변(frozen) 데이터클래스로 구현되어 안전한 데이터 전달을 보장합니다.
엔진은 호출 간에 어떤 참조도 유지하지 않으며, 항상 새 인스턴스를 반환합니다.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from .exceptions import InconsistentPool, MalformedLedger

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class Dimension:
    """
    고정 합계 배분의 한 구성 요소.

    Attributes:
        name: 차원 이름 (벡터 내에서 유일)
        value: 0~100 범위의 정수 값
    """

    name: str
    value: int


@dataclass(frozen=True)
class AllocationVector:
    """
    합계가 항상 100인 차원들의 순서 있는 집합.

    선언 순서가 재분배 적용 순서와 잔여분 귀속 규칙을 결정하므로
    순서는 의미를 가집니다. 벡터는 제자리에서 수정되지 않고
    재분배 때마다 통째로 교체됩니다.

    Attributes:
        dimensions: Dimension 튜플

    Examples:
        >>> mix = AllocationVector.from_mapping(
        ...     {"pmbok": 40, "agile": 20, "lean": 20, "design_thinking": 20}
        ... )
        >>> mix.total
        100
        >>> mix.index_of("lean")
        2
    """

    dimensions: Tuple[Dimension, ...]

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Number]]) -> "AllocationVector":
        """(이름, 값) 쌍의 시퀀스로부터 벡터를 생성합니다."""
        return cls(tuple(Dimension(str(name), value) for name, value in pairs))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Number]) -> "AllocationVector":
        """
        이름 → 값 매핑으로부터 벡터를 생성합니다.

        매핑의 삽입 순서가 차원의 선언 순서가 됩니다.
        """
        return cls.from_pairs(mapping.items())

    def __len__(self) -> int:
        return len(self.dimensions)

    def __iter__(self):
        return iter(self.dimensions)

    def __getitem__(self, index: int) -> Dimension:
        return self.dimensions[index]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.dimensions)

    @property
    def values(self) -> Tuple[Number, ...]:
        return tuple(d.value for d in self.dimensions)

    @property
    def total(self) -> Number:
        return sum(self.values)

    def index_of(self, name: str) -> int:
        """
        이름으로 차원 인덱스를 찾습니다.

        Raises:
            KeyError: 해당 이름의 차원이 없을 경우
        """
        for idx, dim in enumerate(self.dimensions):
            if dim.name == name:
                return idx
        raise KeyError(name)

    def as_dict(self) -> Dict[str, Number]:
        return {d.name: d.value for d in self.dimensions}

    def to_frame(self) -> pd.DataFrame:
        """차트/테이블 표시용 데이터프레임 (name, value 컬럼)."""
        return pd.DataFrame(
            {"name": list(self.names), "value": list(self.values)},
            columns=["name", "value"],
        )


@dataclass(frozen=True)
class Contributor:
    """
    가치 분배에 참여하는 기여자.

    Attributes:
        id: 기여자 식별자 (원장 내에서 유일)
        name: 표시 이름
        contribution_pct: 선언된 기여 비율 (0~100)
        satisfaction_score: 만족도 신호 (0~100)
        value_received: 호출 측에서 미리 계산한 수령 가치 (없으면 풀 총액 기반으로 계산)
    """

    id: str
    name: str
    contribution_pct: float
    satisfaction_score: float = 0.0
    value_received: Optional[float] = None


# 원장 레코드의 대체 키 이름 (대시보드/원격 저장소 양쪽 표기 지원)
_CONTRIBUTOR_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "contributor_id", "contributorId"),
    "name": ("name", "contributor", "stakeholder"),
    "contribution_pct": ("contribution_pct", "contributionPct", "contribution"),
    "satisfaction_score": ("satisfaction_score", "satisfactionScore", "satisfaction"),
    "value_received": ("value_received", "valueReceived"),
}


def _pick(record: Mapping[str, Any], field_name: str) -> Any:
    for key in _CONTRIBUTOR_KEY_ALIASES[field_name]:
        if key in record:
            return record[key]
    return None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _to_float(value: Any, field_name: str, cid: str) -> float:
    """레코드 숫자 필드를 float로 변환 (변환 불가/비유한 값은 MalformedLedger)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan
    if not math.isfinite(number):
        logger.error(f"Invalid {field_name} for contributor {cid}: {value!r}")
        raise MalformedLedger(
            f"기여자 '{cid}'의 {field_name} 값이 숫자가 아닙니다: {value!r}"
        )
    return number


@dataclass(frozen=True)
class ContributionLedger:
    """
    하나의 가치 풀에 연결된 기여자들의 순서 있는 집합.

    기여 비율 합계가 100에서 벗어나는 것은 거부하지 않고 보고만 합니다.

    Attributes:
        contributors: Contributor 튜플
    """

    contributors: Tuple[Contributor, ...]

    @classmethod
    def from_records(
        cls,
        records: Union[Iterable[Mapping[str, Any]], pd.DataFrame],
    ) -> "ContributionLedger":
        """
        딕셔너리 목록 또는 데이터프레임으로부터 원장을 생성합니다.

        카멜 표기(contributionPct 등)와 스네이크 표기를 모두 받습니다.
        id가 없으면 순번(1부터)을, name이 없으면 id를 사용합니다.
        value_received가 비어 있으면(None/NaN) 오버라이드가 없는 것으로 봅니다.

        Args:
            records: 기여자 레코드 목록 또는 데이터프레임

        Returns:
            ContributionLedger 인스턴스

        Raises:
            MalformedLedger: 레코드가 매핑이 아니거나 숫자 필드를 해석할 수 없는 경우
        """
        if isinstance(records, pd.DataFrame):
            records = records.to_dict("records")

        contributors = []
        for position, record in enumerate(records, start=1):
            if not isinstance(record, Mapping):
                logger.error(f"Contributor record #{position} is not a mapping: {record!r}")
                raise MalformedLedger(
                    f"{position}번째 기여자 레코드 형식이 올바르지 않습니다: {record!r}"
                )

            raw_id = _pick(record, "id")
            cid = str(position) if _is_missing(raw_id) else str(raw_id)
            raw_name = _pick(record, "name")
            name = cid if _is_missing(raw_name) else str(raw_name)

            pct = _pick(record, "contribution_pct")
            satisfaction = _pick(record, "satisfaction_score")
            received = _pick(record, "value_received")

            contributors.append(
                Contributor(
                    id=cid,
                    name=name,
                    contribution_pct=(
                        0.0 if _is_missing(pct)
                        else _to_float(pct, "contribution_pct", cid)
                    ),
                    satisfaction_score=(
                        0.0 if _is_missing(satisfaction)
                        else _to_float(satisfaction, "satisfaction_score", cid)
                    ),
                    value_received=(
                        None if _is_missing(received)
                        else _to_float(received, "value_received", cid)
                    ),
                )
            )

        return cls(tuple(contributors))

    def __len__(self) -> int:
        return len(self.contributors)

    def __iter__(self):
        return iter(self.contributors)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.contributors)

    @property
    def contribution_total(self) -> float:
        return float(sum(c.contribution_pct for c in self.contributors))


@dataclass(frozen=True)
class ValuePool:
    """
    분배 대상 가치의 총액과 카테고리별 내역.

    Attributes:
        total_value: 총 가치 (0 이상, 카테고리 값의 합)
        categories: 카테고리명 → 값 (읽기 전용 매핑)

    Raises:
        InconsistentPool: 카테고리가 있는데 총액이 그 합과 다른 경우
    """

    total_value: float
    categories: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # 외부에서 넘긴 dict를 통해 풀이 바뀌지 않도록 복사 후 읽기 전용으로 고정
        object.__setattr__(
            self, "categories", MappingProxyType(dict(self.categories))
        )

        # 카테고리가 있으면 총액은 카테고리 값의 합과 같아야 함
        if self.categories:
            values = list(self.categories.values())
            if not all(is_finite_number(v) for v in values):
                logger.error(f"Non-numeric pool category value: {dict(self.categories)}")
                raise InconsistentPool("가치 풀 카테고리 값이 숫자가 아닙니다.")
            category_sum = float(sum(values))
            if not math.isclose(category_sum, self.total_value, rel_tol=1e-9, abs_tol=1e-6):
                logger.error(
                    f"Pool total {self.total_value} != category sum {category_sum}"
                )
                raise InconsistentPool(
                    f"가치 풀 총액({self.total_value})이 카테고리 합계({category_sum})와 다릅니다."
                )

    def shares(self) -> Dict[str, float]:
        """카테고리별 총액 대비 비중 (총액이 0이면 모두 0)."""
        if self.total_value <= 0:
            return {name: 0.0 for name in self.categories}
        return {
            name: value / self.total_value for name, value in self.categories.items()
        }

    def to_frame(self) -> pd.DataFrame:
        """카테고리, 값, 비중 컬럼을 가진 데이터프레임."""
        shares = self.shares()
        return pd.DataFrame(
            {
                "category": list(self.categories.keys()),
                "value": list(self.categories.values()),
                "share": [shares[name] for name in self.categories],
            },
            columns=["category", "value", "share"],
        )


@dataclass(frozen=True)
class ContributorEquity:
    """기여자 한 명의 형평성 평가 결과."""

    value_received: float
    expected_share: float
    actual_share: float
    equity_balance: float
    within_band: bool


@dataclass(frozen=True)
class EquityReport:
    """
    형평성 평가 결과 리포트 (파생 데이터, 저장하지 않음).

    Attributes:
        per_contributor: 기여자 ID → ContributorEquity (읽기 전용)
        overall_score: 0~1 범위의 전체 공정성 점수 (1이 이상적)
        redistribution_needed: 공정성 밴드를 벗어난 기여자가 있으면 True
        contribution_total: 선언된 기여 비율 합계
        contribution_deviation: contribution_total - 100
        average_satisfaction: 기여 비율 가중 평균 만족도
    """

    per_contributor: Mapping[str, ContributorEquity]
    overall_score: float
    redistribution_needed: bool
    contribution_total: float = 100.0
    contribution_deviation: float = 0.0
    average_satisfaction: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "per_contributor", MappingProxyType(dict(self.per_contributor))
        )

    @property
    def out_of_band(self) -> Sequence[str]:
        """공정성 밴드를 벗어난 기여자 ID 목록 (원장 순서)."""
        return [cid for cid, eq in self.per_contributor.items() if not eq.within_band]

    def to_frame(self) -> pd.DataFrame:
        """기여자별 결과를 테이블로 변환합니다."""
        columns = [
            "id",
            "value_received",
            "expected_share",
            "actual_share",
            "equity_balance",
            "within_band",
        ]
        rows = [
            {
                "id": cid,
                "value_received": eq.value_received,
                "expected_share": eq.expected_share,
                "actual_share": eq.actual_share,
                "equity_balance": eq.equity_balance,
                "within_band": eq.within_band,
            }
            for cid, eq in self.per_contributor.items()
        ]
        return pd.DataFrame(rows, columns=columns)


def is_finite_number(value: object) -> bool:
    """bool을 제외한 유한한 실수인지 확인합니다."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)
