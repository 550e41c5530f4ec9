"""
도메인 계층 예외 정의

이 모듈은 배분 재조정 엔진과 형평성 엔진에서 발생할 수 있는
모든 예외를 정의합니다. UI 계층은 이 예외들을 잡아서
사용자 친화적인 에러 메시지로 변환합니다.

범위를 벗어난 숫자 입력(예: 150%)은 예외가 아니라 정규화 대상입니다.
여기 정의된 예외는 형태, 개수, 합계 같은 구조적 위반에만 사용됩니다.
"""

from __future__ import annotations


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class AllocationError(DomainError):
    """
    배분 벡터 재조정 실패 시 발생하는 예외의 기반 클래스.
    """

    pass


class InvalidIndex(AllocationError):
    """
    변경 대상 차원 인덱스(또는 이름)가 벡터 범위를 벗어났을 때 발생합니다.
    """

    pass


class MalformedVector(AllocationError):
    """
    입력 벡터가 구조적 불변식을 위반했을 때 발생합니다.

    예: 차원 수 부족, 이름 중복, 합계가 100이 아님, 값이 정수가 아님
    """

    pass


class EquityError(DomainError):
    """
    가치 풀 집계 또는 형평성 평가 실패 시 발생하는 예외의 기반 클래스.
    """

    pass


class NegativeCategoryValue(EquityError):
    """
    가치 풀 카테고리 값이 음수(또는 숫자가 아님)일 때 발생합니다.
    """

    pass


class EmptyLedger(EquityError):
    """
    기여 원장에 기여자가 한 명도 없을 때 발생합니다.
    """

    pass


class NonPositivePool(EquityError):
    """
    가치 풀 총액이 0 이하일 때 발생합니다.

    총액이 0이면 "받은 몫"이 정의되지 않으므로
    기여도 0인 기여자(항상 공정으로 간주)와는 구분됩니다.
    """

    pass


class DuplicateContributor(EquityError):
    """
    기여 원장에 같은 ID의 기여자가 두 번 이상 등장할 때 발생합니다.
    """

    pass


class MalformedLedger(EquityError):
    """
    기여자 레코드의 숫자 필드를 해석할 수 없을 때 발생합니다.

    예: contributionPct가 "n/a", 레코드가 딕셔너리가 아님
    """

    pass


class InconsistentPool(EquityError):
    """
    가치 풀 총액이 카테고리 값의 합과 일치하지 않을 때 발생합니다.
    """

    pass
