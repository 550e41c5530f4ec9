"""방법론 믹스 패널 모듈.

하이브리드 방법론 엔진의 기본 단계 구성과
단계별 믹스 조정, 전체 평균 믹스 계산을 제공합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from ..core.config import CONFIG, DEFAULT_METHODOLOGIES
from ..domain.exceptions import MalformedVector
from ..domain.models import AllocationVector, Dimension
from ..domain.validation import validate_vector
from .redistribution import rebalance_by_name

logger = logging.getLogger(__name__)

GOVERNANCE_LEVELS: Tuple[str, ...] = ("low", "medium", "high")


@dataclass(frozen=True)
class PhaseConfiguration:
    """프로젝트 단계 하나의 방법론 구성.

    Attributes:
        name: 단계명
        methodology_mix: 방법론별 비중 (합계 100)
        duration: 예상 기간 (표시용 문자열)
        key_practices: 주요 실천 항목
        success_criteria: 성공 기준
        governance_level: 거버넌스 수준 ("low" | "medium" | "high")
        team_autonomy: 팀 자율성 (0~100)
        documentation_level: 문서화 수준 (0~100)
        change_tolerance: 변경 허용도 (0~100)
    """

    name: str
    methodology_mix: AllocationVector
    duration: str = ""
    key_practices: Tuple[str, ...] = ()
    success_criteria: Tuple[str, ...] = ()
    governance_level: str = "medium"
    team_autonomy: int = 50
    documentation_level: int = 50
    change_tolerance: int = 50


def _mix(pmbok: int, agile: int, lean: int, design_thinking: int) -> AllocationVector:
    return AllocationVector.from_pairs(
        zip(DEFAULT_METHODOLOGIES, (pmbok, agile, lean, design_thinking))
    )


def default_phases() -> List[PhaseConfiguration]:
    """제약 프로젝트용 기본 5단계 구성을 반환합니다."""
    return [
        PhaseConfiguration(
            name="Iniciação e Discovery",
            methodology_mix=_mix(40, 20, 20, 20),
            duration="2-4 semanas",
            key_practices=(
                "Charter de Projeto (PMBOK)",
                "Design Thinking Workshops",
                "Stakeholder Mapping",
                "Value Stream Analysis (Lean)",
            ),
            success_criteria=(
                "Escopo bem definido",
                "Stakeholders alinhados",
                "Riscos identificados",
                "Time formado",
            ),
            governance_level="high",
            team_autonomy=30,
            documentation_level=80,
            change_tolerance=40,
        ),
        PhaseConfiguration(
            name="Planejamento Adaptativo",
            methodology_mix=_mix(50, 30, 15, 5),
            duration="3-6 semanas",
            key_practices=(
                "WBS e Cronograma (PMBOK)",
                "Sprint Planning (Agile)",
                "Kanban Board Setup",
                "Risk Register",
            ),
            success_criteria=(
                "Plano detalhado aprovado",
                "Sprints definidos",
                "Recursos alocados",
                "Baseline estabelecida",
            ),
            governance_level="high",
            team_autonomy=40,
            documentation_level=90,
            change_tolerance=30,
        ),
        PhaseConfiguration(
            name="Execução Ágil",
            methodology_mix=_mix(20, 60, 15, 5),
            duration="8-16 semanas",
            key_practices=(
                "Daily Standups",
                "Sprint Reviews",
                "Continuous Integration",
                "Kaizen Events (Lean)",
            ),
            success_criteria=(
                "Entregas incrementais",
                "Velocity estável",
                "Quality gates passed",
                "Stakeholder satisfaction",
            ),
            governance_level="medium",
            team_autonomy=80,
            documentation_level=40,
            change_tolerance=90,
        ),
        PhaseConfiguration(
            name="Monitoramento e Controle",
            methodology_mix=_mix(60, 25, 10, 5),
            duration="Contínuo",
            key_practices=(
                "Earned Value Management",
                "Burndown Charts",
                "Risk Monitoring",
                "Quality Metrics",
            ),
            success_criteria=(
                "Métricas em dia",
                "Riscos controlados",
                "Orçamento no track",
                "Qualidade assegurada",
            ),
            governance_level="high",
            team_autonomy=50,
            documentation_level=70,
            change_tolerance=50,
        ),
        PhaseConfiguration(
            name="Entrega e Encerramento",
            methodology_mix=_mix(70, 15, 10, 5),
            duration="2-4 semanas",
            key_practices=(
                "Final Deliverable Review",
                "Lessons Learned",
                "Project Closure",
                "Knowledge Transfer",
            ),
            success_criteria=(
                "Entregas aceitas",
                "Documentação completa",
                "Time liberado",
                "Conhecimento transferido",
            ),
            governance_level="high",
            team_autonomy=30,
            documentation_level=95,
            change_tolerance=20,
        ),
    ]


def update_phase_methodology(
    phase: PhaseConfiguration, methodology: str, value: float
) -> PhaseConfiguration:
    """단계의 특정 방법론 비중을 바꾸고 나머지를 재분배한 새 단계를 반환합니다.

    Raises:
        MalformedVector: 단계의 믹스가 불변식을 위반한 경우
        InvalidIndex: 알 수 없는 방법론 이름인 경우
    """
    mix = rebalance_by_name(phase.methodology_mix, methodology, value)
    return replace(phase, methodology_mix=mix)


def overall_methodology_mix(
    mixes: Iterable[AllocationVector | PhaseConfiguration],
) -> AllocationVector:
    """
    여러 단계 믹스의 방법론별 평균을 계산합니다.

    평균은 정수 내림으로 계산하고, 내림 잔여분은 마지막 방법론에 더해
    결과도 합계 100인 유효한 벡터가 되도록 합니다.

    Args:
        mixes: AllocationVector 또는 PhaseConfiguration 목록

    Returns:
        평균 믹스 AllocationVector

    Raises:
        MalformedVector: 입력이 비었거나, 단계별 방법론 구성이 다르거나,
            어느 한 믹스가 불변식을 위반한 경우
    """
    vectors: List[AllocationVector] = [
        m.methodology_mix if isinstance(m, PhaseConfiguration) else m for m in mixes
    ]

    if not vectors:
        logger.error("No methodology mixes to average")
        raise MalformedVector("평균을 계산할 단계가 없습니다.")

    names: Sequence[str] = vectors[0].names
    for vector in vectors:
        validate_vector(vector)
        if vector.names != names:
            logger.error(f"Methodology names differ: {vector.names} vs {names}")
            raise MalformedVector("단계별 방법론 구성이 서로 다릅니다.")

    # ========================================
    # 방법론별 합계 → 정수 평균
    # ========================================
    frame = pd.DataFrame(
        [[int(v) for v in vector.values] for vector in vectors], columns=list(names)
    )
    totals = frame.sum(axis=0)
    averages = [int(totals[name]) // len(vectors) for name in names]

    # 잔여분은 마지막 방법론에 귀속
    averages[-1] += CONFIG.allocation.total - sum(averages)

    logger.debug(f"Overall methodology mix over {len(vectors)} phases: {averages}")
    return AllocationVector(
        tuple(Dimension(name, value) for name, value in zip(names, averages))
    )
