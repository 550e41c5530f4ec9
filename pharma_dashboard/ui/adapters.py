"""
도메인 예외 → UI 에러 메시지 어댑터

이 모듈은 엔진에서 발생하는 도메인 예외를 잡아서
Streamlit 사용자 친화적인 에러 메시지로 변환합니다.

이를 통해 엔진은 Streamlit에 의존하지 않으면서도
UI에서 적절한 에러 메시지를 표시할 수 있습니다.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

import streamlit as st

from pharma_dashboard.domain.exceptions import (
    AllocationError,
    DomainError,
    EquityError,
    InvalidIndex,
)


def show_domain_error(error: DomainError) -> None:
    """
    도메인 예외 하나를 종류에 맞는 Streamlit 메시지로 표시합니다.

    EngineResult.error를 그대로 넘길 수 있습니다.
    """
    if isinstance(error, InvalidIndex):
        # 잘못된 항목 선택: 노란색 경고 메시지
        st.warning(f"⚠️ 배분 항목 선택 오류: {str(error)}")
    elif isinstance(error, AllocationError):
        # 배분 벡터 손상: 빨간색 에러 메시지
        st.error(f"❌ 배분 재조정 실패: {str(error)}")
    elif isinstance(error, EquityError):
        # 형평성 계산 실패: 빨간색 에러 메시지
        st.error(f"❌ 형평성 평가 실패: {str(error)}")
    else:
        st.error(f"❌ 처리 실패: {str(error)}")


@contextmanager
def handle_engine_errors() -> Generator[None, None, None]:
    """
    도메인 예외를 잡아서 Streamlit 에러 메시지로 변환하는 컨텍스트 매니저.

    Yields:
        None

    Examples:
        >>> from pharma_dashboard.allocation import rebalance
        >>> with handle_engine_errors():
        ...     mix = rebalance(mix, index, value)

    Notes:
        - InvalidIndex: 잘못된 항목 선택 (경고)
        - MalformedVector: 배분 벡터 손상
        - EquityError 계열: 원장/풀 데이터 오류
    """
    try:
        yield

    except DomainError as e:
        show_domain_error(e)

    except Exception as e:
        # 예상치 못한 예외: 상세 정보와 함께 표시
        st.error(f"❌ 예상치 못한 오류가 발생했습니다: {type(e).__name__}: {str(e)}")
        st.exception(e)
