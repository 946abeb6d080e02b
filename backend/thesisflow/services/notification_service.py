"""Notification Service 도메인 서비스 레이어입니다. 알림 조회/읽음 처리와 알림 발송(sink)을 담당합니다."""

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from thesisflow.models.notification import Notification
from thesisflow.utils.errors import NotFound
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read == False)  # noqa: E712
    return q.order_by(Notification.created_at.desc(), Notification.noti_id.desc()).limit(50).all()


def mark_read(db: Session, noti_id: int, user_id: int) -> Notification:
    noti = db.query(Notification).filter(
        Notification.noti_id == noti_id,
        Notification.user_id == user_id,
    ).first()
    if not noti:
        raise NotFound("알림을 찾을 수 없습니다.")
    noti.is_read = True
    db.commit()
    db.refresh(noti)
    return noti


def mark_all_read(db: Session, user_id: int):
    db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read == False,  # noqa: E712
    ).update({"is_read": True})
    db.commit()


def notify(
    db: Session,
    user_id: Optional[int],
    noti_type: str,
    title: str,
    message: Optional[str] = None,
    link_url: Optional[str] = None,
) -> Optional[Notification]:
    """알림을 기록한다. 실패해도 호출한 작업을 막지 않는다.

    호출 측 트랜잭션이 commit 된 뒤에 호출해야 한다. 실패 시 이 세션의 미반영 변경은 rollback 된다.
    """
    if user_id is None:
        return None
    try:
        noti = Notification(
            user_id=user_id,
            noti_type=noti_type,
            title=title,
            message=message,
            link_url=link_url,
        )
        db.add(noti)
        db.commit()
        return noti
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("[notification] delivery failed type=%s user=%s: %s", noti_type, user_id, exc)
        return None


def notify_many(
    db: Session,
    user_ids: Iterable[int],
    noti_type: str,
    title: str,
    message: Optional[str] = None,
    link_url: Optional[str] = None,
):
    for user_id in sorted(set(user_ids)):
        notify(db, user_id, noti_type, title, message, link_url)
