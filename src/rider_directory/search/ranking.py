"""Ranks matching riders by how many campaigns they have taken part in."""

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from rider_directory.db.schema import CampaignRider, Rider


def build_ranked_query(predicate: ColumnElement[bool], limit: int) -> Select[tuple[Rider]]:
    """Select riders matching ``predicate``, most participations first.

    Riders with no participation records are kept by the outer join and
    sort last. Ties have no defined order.
    """
    participation_count = func.count(CampaignRider.id)
    return (
        select(Rider)
        .outerjoin(CampaignRider, CampaignRider.rider_id == Rider.id)
        .where(predicate)
        .group_by(Rider.id)
        .order_by(participation_count.desc())
        .limit(limit)
    )


def rank_riders(session: Session, predicate: ColumnElement[bool], limit: int) -> list[Rider]:
    result = session.execute(build_ranked_query(predicate, limit))
    return list(result.scalars().all())
