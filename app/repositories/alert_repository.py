"""
Alert Repository - Data access layer for alerts
"""
from typing import Optional, List
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, func

from atams.db import BaseRepository
from app.models.alert import Alert


class AlertRepository(BaseRepository[Alert]):
    def __init__(self):
        super().__init__(Alert)

    def find_unacknowledged_since(
        self,
        db: Session,
        alert_type: str,
        site_id: str,
        guard_id: int,
        checkpoint_id: int,
        checkpoint_name: str,
        since: datetime
    ) -> Optional[Alert]:
        """
        Find an open alert for the same site, guard and checkpoint created since `since`.
        Alerts without a checkpoint reference fall back to matching the checkpoint name
        inside the message.
        """
        return db.query(Alert).filter(
            and_(
                Alert.al_type == alert_type,
                Alert.al_site_id == site_id,
                Alert.al_guard_id == guard_id,
                Alert.al_acknowledged.is_(False),
                Alert.al_created_at >= since,
                or_(
                    Alert.al_checkpoint_id == checkpoint_id,
                    and_(
                        Alert.al_checkpoint_id.is_(None),
                        func.lower(Alert.al_message).contains(checkpoint_name.lower(), autoescape=True)
                    )
                )
            )
        ).order_by(Alert.al_created_at.desc()).first()

    def get_alerts_with_filters(
        self,
        db: Session,
        site_id: str = None,
        guard_id: int = None,
        alert_type: str = None,
        acknowledged: bool = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Alert]:
        """Get alerts with various filters using ORM"""
        query = db.query(Alert)

        if site_id:
            query = query.filter(Alert.al_site_id == site_id)
        if guard_id:
            query = query.filter(Alert.al_guard_id == guard_id)
        if alert_type:
            query = query.filter(Alert.al_type == alert_type)
        if acknowledged is not None:
            query = query.filter(Alert.al_acknowledged.is_(acknowledged))

        return query.order_by(Alert.al_created_at.desc()).offset(skip).limit(limit).all()

    def count_alerts_with_filters(
        self,
        db: Session,
        site_id: str = None,
        guard_id: int = None,
        alert_type: str = None,
        acknowledged: bool = None
    ) -> int:
        """Count alerts with filters using native SQL"""
        conditions = []
        params = {}

        if site_id:
            conditions.append("al_site_id = :site_id")
            params["site_id"] = site_id
        if guard_id:
            conditions.append("al_guard_id = :guard_id")
            params["guard_id"] = guard_id
        if alert_type:
            conditions.append("al_type = :alert_type")
            params["alert_type"] = alert_type
        if acknowledged is not None:
            conditions.append("al_acknowledged = :acknowledged")
            params["acknowledged"] = acknowledged

        where_clause = " AND ".join(conditions) if conditions else "1=1"

        query = f"""
            SELECT COUNT(*)
            FROM patrol.alerts
            WHERE {where_clause}
        """

        return self.execute_raw_sql_scalar(db, query, params)
