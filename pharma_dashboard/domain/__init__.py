"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .exceptions import (
    AllocationError,
    DomainError,
    DuplicateContributor,
    EmptyLedger,
    EquityError,
    InconsistentPool,
    InvalidIndex,
    MalformedLedger,
    MalformedVector,
    NegativeCategoryValue,
    NonPositivePool,
)
from .models import (
    AllocationVector,
    ContributionLedger,
    Contributor,
    ContributorEquity,
    Dimension,
    EquityReport,
    ValuePool,
)
from .results import EngineResult, capture
from .validation import (
    validate_index,
    validate_ledger,
    validate_pool_total,
    validate_vector,
)

__all__ = [
    # 예외
    "DomainError",
    "AllocationError",
    "InvalidIndex",
    "MalformedVector",
    "EquityError",
    "NegativeCategoryValue",
    "EmptyLedger",
    "NonPositivePool",
    "DuplicateContributor",
    "MalformedLedger",
    "InconsistentPool",
    # 모델
    "Dimension",
    "AllocationVector",
    "Contributor",
    "ContributionLedger",
    "ValuePool",
    "ContributorEquity",
    "EquityReport",
    # 결과 래퍼
    "EngineResult",
    "capture",
    # 검증
    "validate_vector",
    "validate_index",
    "validate_ledger",
    "validate_pool_total",
]
