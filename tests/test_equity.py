"""
형평성 점수 엔진 테스트

기여자별 형평성 균형, 전체 점수, 재분배 권고 판단을 검증합니다.
"""
from __future__ import annotations

import dataclasses

import pandas as pd
import pytest

from pharma_dashboard.domain.exceptions import (
    DuplicateContributor,
    EmptyLedger,
    MalformedLedger,
    NonPositivePool,
)
from pharma_dashboard.core.config import EquityConfig
from pharma_dashboard.domain.models import ContributionLedger, Contributor, ValuePool
from pharma_dashboard.equity import aggregate, compute_equity, try_compute_equity

TOTAL = 3_165_000


def _with_received(ledger: ContributionLedger, cid: str, value: float) -> ContributionLedger:
    return ContributionLedger(
        tuple(
            dataclasses.replace(c, value_received=value) if c.id == cid else c
            for c in ledger
        )
    )


# ============================================================
# 시나리오 테스트
# ============================================================

def test_balanced_partners_need_no_redistribution(partner_ledger):
    """수령 가치가 선언 비율과 거의 같으면 모두 밴드 안"""
    report = compute_equity(partner_ledger, TOTAL)

    for cid in ("p1", "p2", "p3", "p4"):
        balance = report.per_contributor[cid].equity_balance
        assert 0.85 <= balance <= 1.15
        assert balance == pytest.approx(1.0, abs=0.01)

    assert report.redistribution_needed is False
    assert report.overall_score == pytest.approx(1.0, abs=0.01)
    assert list(report.out_of_band) == []


def test_underpaid_partner_triggers_redistribution(partner_ledger):
    """p4 수령 가치가 50,000으로 떨어지면 재분배 권고"""
    ledger = _with_received(partner_ledger, "p4", 50_000)

    report = compute_equity(ledger, TOTAL)

    p4 = report.per_contributor["p4"]
    assert p4.equity_balance < 0.85
    assert p4.equity_balance == pytest.approx(50_000 / TOTAL / 0.10)
    assert p4.within_band is False
    assert report.redistribution_needed is True
    assert list(report.out_of_band) == ["p4"]


def test_equal_contributions_and_values_are_perfectly_fair():
    """동일 비율·동일 수령이면 모든 균형이 1"""
    ledger = ContributionLedger(
        tuple(
            Contributor(id=f"c{i}", name=f"Parceiro {i}", contribution_pct=25,
                        value_received=250_000)
            for i in range(4)
        )
    )

    report = compute_equity(ledger, 1_000_000)

    assert all(eq.equity_balance == 1.0 for eq in report.per_contributor.values())
    assert report.redistribution_needed is False
    assert report.overall_score == 1.0


def test_baseline_without_override_is_exactly_fair():
    """오버라이드가 없으면 총액 × 선언 비율을 받은 것으로 계산"""
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=60),
            Contributor(id="b", name="B", contribution_pct=40),
        )
    )

    report = compute_equity(ledger, 500_000)

    assert report.per_contributor["a"].value_received == pytest.approx(300_000)
    assert report.per_contributor["b"].value_received == pytest.approx(200_000)
    assert report.per_contributor["a"].equity_balance == 1.0
    assert report.overall_score == 1.0


# ============================================================
# 점수 경계 및 단조성
# ============================================================

def test_balance_clamped_to_two(partner_ledger):
    """과다 수령은 균형 2에서 상한"""
    ledger = _with_received(partner_ledger, "p4", TOTAL)

    report = compute_equity(ledger, TOTAL)

    assert report.per_contributor["p4"].equity_balance == 2.0
    assert report.redistribution_needed is True


def test_zero_contribution_is_fair_by_convention():
    """기여 비율 0인 기여자의 균형은 1"""
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=100),
            Contributor(id="z", name="Observer", contribution_pct=0, value_received=10),
        )
    )

    report = compute_equity(ledger, 1_000)

    assert report.per_contributor["z"].equity_balance == 1.0
    assert report.per_contributor["z"].within_band is True


def test_overall_score_monotonic(partner_ledger):
    """한 기여자의 균형이 1에서 멀어질수록 전체 점수 감소"""
    scores = [
        compute_equity(_with_received(partner_ledger, "p4", value), TOTAL).overall_score
        for value in (316_500, 250_000, 150_000, 50_000, 0)
    ]

    assert scores == sorted(scores, reverse=True)
    assert scores[0] > scores[-1]
    assert all(0.0 <= s <= 1.0 for s in scores)


def test_custom_fairness_band(partner_ledger):
    """밴드를 좁히면 작은 편차도 재분배 대상"""
    report = compute_equity(partner_ledger, TOTAL, fairness_band=(0.999, 1.001))

    assert report.redistribution_needed is True
    assert "p4" in report.out_of_band


def test_invalid_band_rejected(partner_ledger):
    with pytest.raises(ValueError):
        compute_equity(partner_ledger, TOTAL, fairness_band=(1.2, 0.8))


def test_out_of_range_inputs_are_clamped():
    """범위를 벗어난 비율/음수 오버라이드는 정규화"""
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=150, value_received=-10),
            Contributor(id="b", name="B", contribution_pct=-5),
        )
    )

    report = compute_equity(ledger, 1_000)

    assert report.per_contributor["a"].expected_share == 1.0
    assert report.per_contributor["a"].value_received == 0.0
    assert report.per_contributor["a"].equity_balance == 0.0
    assert report.per_contributor["b"].equity_balance == 1.0


# ============================================================
# 보고 필드
# ============================================================

def test_contribution_deviation_is_reported_not_rejected():
    """기여 비율 합계가 100이 아니어도 계산하고 편차를 보고"""
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=50),
            Contributor(id="b", name="B", contribution_pct=40),
        )
    )

    report = compute_equity(ledger, 1_000)

    assert report.contribution_total == 90
    assert report.contribution_deviation == -10


def test_average_satisfaction_weighted(partner_ledger):
    report = compute_equity(partner_ledger, TOTAL)

    assert report.average_satisfaction == pytest.approx(88.0)


def test_accepts_value_pool(partner_ledger):
    """ValuePool과 총액 숫자 모두 허용"""
    pool = aggregate(
        {"economic": 1_250_000, "social": 850_000, "environmental": 450_000,
         "stakeholder": 615_000}
    )

    assert pool.total_value == TOTAL
    assert compute_equity(partner_ledger, pool) == compute_equity(partner_ledger, TOTAL)


def test_accepts_records_and_dataframe():
    """레코드 목록과 데이터프레임 모두 원장으로 사용 가능"""
    records = [
        {"id": "a", "contributionPct": 70, "valueReceived": 700},
        {"id": "b", "contributionPct": 30, "valueReceived": None},
    ]

    from_list = compute_equity(records, 1_000)
    from_frame = compute_equity(pd.DataFrame(records), 1_000)

    assert from_list.per_contributor["b"].value_received == pytest.approx(300)
    assert from_frame.per_contributor["b"].value_received == pytest.approx(300)
    assert from_list.overall_score == pytest.approx(from_frame.overall_score)


def test_report_to_frame(partner_ledger):
    frame = compute_equity(partner_ledger, TOTAL).to_frame()

    assert list(frame["id"]) == ["p1", "p2", "p3", "p4"]
    assert "equity_balance" in frame.columns
    assert frame["within_band"].all()


def test_report_is_read_only(partner_ledger):
    report = compute_equity(partner_ledger, TOTAL)

    with pytest.raises(TypeError):
        report.per_contributor["p1"] = None  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        report.overall_score = 0.0  # type: ignore[misc]


# ============================================================
# 오류 보고 테스트
# ============================================================

@pytest.mark.parametrize("ledger", [ContributionLedger(()), [], None])
def test_empty_ledger(ledger):
    with pytest.raises(EmptyLedger):
        compute_equity(ledger, 1_000)


@pytest.mark.parametrize("total", [0, -5, ValuePool(total_value=0)])
def test_non_positive_pool(partner_ledger, total):
    with pytest.raises(NonPositivePool):
        compute_equity(partner_ledger, total)


def test_empty_ledger_reported_before_pool():
    """원장과 풀이 모두 잘못되면 원장 오류가 우선"""
    with pytest.raises(EmptyLedger):
        compute_equity([], 0)


def test_duplicate_contributor_ids():
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=50),
            Contributor(id="a", name="A2", contribution_pct=50),
        )
    )

    with pytest.raises(DuplicateContributor):
        compute_equity(ledger, 1_000)


def test_try_compute_equity(partner_ledger):
    ok = try_compute_equity(partner_ledger, TOTAL)
    failed = try_compute_equity(partner_ledger, 0)

    assert ok.ok and ok.value is not None
    assert not failed.ok
    assert isinstance(failed.error, NonPositivePool)


# ============================================================
# 손상된 기여자 레코드
# ============================================================

@pytest.mark.parametrize(
    "record",
    [
        {"id": "a", "contributionPct": "n/a"},
        {"id": "a", "contributionPct": 50, "satisfactionScore": "좋음"},
        {"id": "a", "contributionPct": 50, "valueReceived": [1, 2]},
        {"id": "a", "contributionPct": float("inf")},
    ],
)
def test_malformed_record_is_returned_as_error(record):
    """숫자로 해석할 수 없는 필드는 예외 대신 결과 값으로 반환"""
    result = try_compute_equity([record], 100)

    assert not result.ok
    assert isinstance(result.error, MalformedLedger)


def test_malformed_record_raises_domain_error():
    with pytest.raises(MalformedLedger):
        compute_equity([{"id": "a", "contributionPct": "n/a"}], 100)


def test_non_mapping_record():
    result = try_compute_equity(["a", "b"], 100)

    assert isinstance(result.error, MalformedLedger)


def test_numeric_strings_are_accepted():
    report = compute_equity(
        [{"id": "a", "contributionPct": "60"}, {"id": "b", "contributionPct": "40"}], 100
    )

    assert report.per_contributor["a"].expected_share == pytest.approx(0.6)


# ============================================================
# 기여 비율 기준값 설정
# ============================================================

def test_custom_expected_total_controls_warning(caplog):
    """기준 합계를 바꾸면 편차 경고 기준도 함께 바뀜"""
    ledger = ContributionLedger(
        (
            Contributor(id="a", name="A", contribution_pct=30),
            Contributor(id="b", name="B", contribution_pct=20),
        )
    )
    config = EquityConfig(expected_contribution_total=50.0)

    with caplog.at_level("WARNING", logger="pharma_dashboard.domain.validation"):
        report = compute_equity(ledger, 1_000, config=config)

    assert report.contribution_deviation == 0.0
    assert not any("deviates" in r.getMessage() for r in caplog.records)

    caplog.clear()
    with caplog.at_level("WARNING", logger="pharma_dashboard.domain.validation"):
        compute_equity(ledger, 1_000)

    assert any("deviates from 100" in r.getMessage() for r in caplog.records)
