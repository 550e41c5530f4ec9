import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pharma_dashboard.domain.models import AllocationVector, ContributionLedger  # noqa: E402


@pytest.fixture
def methodology_mix() -> AllocationVector:
    """착수 단계 기본 방법론 믹스 (40/20/20/20)."""
    return AllocationVector.from_mapping(
        {"pmbok": 40, "agile": 20, "lean": 20, "design_thinking": 20}
    )


@pytest.fixture
def partner_ledger() -> ContributionLedger:
    """수령 가치가 선언 비율과 거의 일치하는 4자 파트너 원장."""
    return ContributionLedger.from_records(
        [
            {"id": "p1", "name": "Parceiro Estratégico", "contributionPct": 45,
             "satisfactionScore": 89, "valueReceived": 1425000},
            {"id": "p2", "name": "Comunidade Local", "contributionPct": 30,
             "satisfactionScore": 85, "valueReceived": 950000},
            {"id": "p3", "name": "Funcionários", "contributionPct": 15,
             "satisfactionScore": 91, "valueReceived": 475000},
            {"id": "p4", "name": "Investidores", "contributionPct": 10,
             "satisfactionScore": 88, "valueReceived": 315000},
        ]
    )
