"""
코어 계층 퍼블릭 API

전역 설정 객체를 재수출합니다.
"""

from __future__ import annotations

from .config import (
    CONFIG,
    AllocationConfig,
    DashboardConfig,
    EquityConfig,
    SharedValueConfig,
)

__all__ = [
    "CONFIG",
    "AllocationConfig",
    "DashboardConfig",
    "EquityConfig",
    "SharedValueConfig",
]
