"""
도메인 모델, 가치 풀 집계, 검증 테스트
"""
from __future__ import annotations

import math

import pandas as pd
import pytest

from pharma_dashboard.domain.exceptions import InconsistentPool, NegativeCategoryValue
from pharma_dashboard.domain.models import AllocationVector, ContributionLedger, ValuePool
from pharma_dashboard.domain.validation import validate_pool_total, validate_vector
from pharma_dashboard.equity.pool import aggregate


# ============================================================
# AllocationVector
# ============================================================

def test_vector_from_mapping_keeps_order(methodology_mix):
    assert methodology_mix.names == ("pmbok", "agile", "lean", "design_thinking")
    assert methodology_mix.values == (40, 20, 20, 20)
    assert methodology_mix.total == 100
    assert len(methodology_mix) == 4


def test_vector_index_of(methodology_mix):
    assert methodology_mix.index_of("lean") == 2
    with pytest.raises(KeyError):
        methodology_mix.index_of("kanban")


def test_vector_to_frame(methodology_mix):
    frame = methodology_mix.to_frame()

    assert list(frame.columns) == ["name", "value"]
    assert frame["value"].sum() == 100


def test_validate_vector_passes(methodology_mix):
    validate_vector(methodology_mix)


# ============================================================
# ContributionLedger
# ============================================================

def test_ledger_from_records_aliases():
    """카멜/스네이크 표기 모두 인식"""
    ledger = ContributionLedger.from_records(
        [
            {"contributor_id": 7, "stakeholder": "Investidores",
             "contribution_pct": 10, "satisfaction": 88},
            {"contributionPct": 90},
        ]
    )

    first, second = ledger.contributors
    assert first.id == "7"
    assert first.name == "Investidores"
    assert first.satisfaction_score == 88.0
    assert first.value_received is None
    assert second.id == "2"
    assert second.name == "2"
    assert ledger.contribution_total == 100.0


def test_ledger_from_dataframe_nan_override():
    frame = pd.DataFrame(
        {"id": ["a", "b"], "contributionPct": [60, 40], "valueReceived": [600.0, math.nan]}
    )

    ledger = ContributionLedger.from_records(frame)

    assert ledger.ids == ("a", "b")
    assert ledger.contributors[0].value_received == 600.0
    assert ledger.contributors[1].value_received is None


# ============================================================
# ValuePool
# ============================================================

def test_aggregate_sums_categories():
    pool = aggregate({"economic": 1_250_000, "social": 850_000, "environmental": 450_000})

    assert pool.total_value == 2_550_000
    assert dict(pool.categories) == {
        "economic": 1_250_000,
        "social": 850_000,
        "environmental": 450_000,
    }


def test_aggregate_empty_is_zero_pool():
    pool = aggregate({})

    assert pool.total_value == 0
    assert pool.shares() == {}


@pytest.mark.parametrize("bad", [-1, math.nan, "100"])
def test_aggregate_rejects_negative(bad):
    with pytest.raises(NegativeCategoryValue):
        aggregate({"economic": 100, "social": bad})


def test_pool_shares_and_frame():
    pool = aggregate({"economic": 300, "social": 100})

    assert pool.shares() == {"economic": 0.75, "social": 0.25}
    frame = pool.to_frame()
    assert list(frame.columns) == ["category", "value", "share"]
    assert frame["share"].sum() == pytest.approx(1.0)


def test_pool_categories_not_shared_with_caller():
    """원본 dict를 수정해도 풀은 바뀌지 않음"""
    source = {"economic": 300}
    pool = aggregate(source)
    source["economic"] = 0

    assert pool.categories["economic"] == 300
    with pytest.raises(TypeError):
        pool.categories["social"] = 1  # type: ignore[index]


def test_zero_pool_shares():
    pool = ValuePool(total_value=0, categories={"economic": 0})

    assert pool.shares() == {"economic": 0.0}


def test_validate_pool_total_returns_float():
    assert validate_pool_total(10) == 10.0


def test_pool_direct_construction_matches_categories():
    pool = ValuePool(total_value=400, categories={"economic": 300, "social": 100})

    assert pool.total_value == 400


@pytest.mark.parametrize(
    "total, categories",
    [(500, {"economic": 300, "social": 100}), (100, {"economic": "100"})],
)
def test_pool_rejects_inconsistent_total(total, categories):
    """총액과 카테고리 합계가 다르면 생성 불가"""
    with pytest.raises(InconsistentPool):
        ValuePool(total_value=total, categories=categories)
