"""
UI 레이어의 공개 API

이 모듈은 Streamlit 기반 에러 어댑터와 세션 상태 헬퍼를 재수출합니다.
"""

from .adapters import handle_engine_errors, show_domain_error
from .session import (
    apply_rebalance,
    get_equity_report,
    get_mix,
    refresh_equity,
)

__all__ = (
    # Adapters
    "handle_engine_errors",
    "show_domain_error",
    # Session
    "get_mix",
    "apply_rebalance",
    "get_equity_report",
    "refresh_equity",
)
