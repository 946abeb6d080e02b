"""서비스 레이어에서 발생시키는 도메인 예외입니다.

모두 ``HTTPException`` 을 상속하므로 라우터에서 별도 변환 없이 그대로 응답으로 전달됩니다.
"""

from typing import Iterable, Optional

from fastapi import HTTPException, status


class NotFound(HTTPException):
    def __init__(self, detail: str = "대상을 찾을 수 없습니다."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "권한이 없습니다."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class PreconditionFailed(HTTPException):
    """엔티티가 요청한 작업을 허용하지 않는 상태일 때 사용합니다."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InvalidTransition(HTTPException):
    """허용되지 않은 워크플로 전이. 재시도를 위해 가능한 다음 상태 목록을 함께 전달합니다."""

    def __init__(self, current_status: str, target: Optional[str], valid_transitions: Iterable[str]):
        self.current_status = current_status
        self.target = target
        self.valid_transitions = sorted(valid_transitions)
        if target:
            message = f"Cannot transition from {current_status} to {target}"
        else:
            message = f"No such action is allowed from status: {current_status}"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": message,
                "current_status": current_status,
                "valid_transitions": self.valid_transitions,
            },
        )
