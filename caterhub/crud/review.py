from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from caterhub.core.constants import ReviewStatus, MAX_REVIEW_MENU_ITEMS
from caterhub.models.menu.menu_item import MenuItem
from caterhub.models.review import Review, ReviewMenuItem
from caterhub.schemas.review import ReviewCreate


def _review_query():
    return select(Review).options(
        selectinload(Review.menu_item_links).selectinload(ReviewMenuItem.menu_item)
    )


async def get_reviews(db: AsyncSession, status: str = None):
    query = _review_query()
    if status:
        query = query.where(Review.status == status)

    result = await db.execute(query.order_by(Review.created_at.desc()))
    return result.scalars().all()


async def get_approved_reviews(db: AsyncSession):
    return await get_reviews(db, status=ReviewStatus.APPROVED.value)


async def get_review(db: AsyncSession, review_id: str):
    result = await db.execute(
        _review_query()
        .where(Review.id == review_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_review(db: AsyncSession, review: ReviewCreate):
    """New reviews always start as pending."""
    # de-dupe, keep submission order
    menu_item_ids = list(dict.fromkeys(review.menu_item_ids))
    if len(menu_item_ids) > MAX_REVIEW_MENU_ITEMS:
        raise ValueError(f"A review can mention at most {MAX_REVIEW_MENU_ITEMS} menu items")

    if menu_item_ids:
        res = await db.execute(select(MenuItem.id).where(MenuItem.id.in_(menu_item_ids)))
        found = set(res.scalars().all())
        missing = [i for i in menu_item_ids if i not in found]
        if missing:
            raise ValueError(f"Unknown menu item(s): {', '.join(missing)}")

    new_review = Review(
        full_name=review.full_name.strip(),
        review_text=review.review_text.strip(),
        rating=review.rating,
        status=ReviewStatus.PENDING.value,
    )
    new_review.menu_item_links = [ReviewMenuItem(menu_item_id=i) for i in menu_item_ids]

    db.add(new_review)
    await db.commit()
    return await get_review(db, new_review.id)


async def update_review_status(db: AsyncSession, review_id: str, status: ReviewStatus, reviewed_by: str = None):
    review = await get_review(db, review_id)
    if not review:
        return None

    review.status = ReviewStatus(status).value
    if review.status == ReviewStatus.PENDING.value:
        review.reviewed_by = None
        review.reviewed_at = None
    else:
        review.reviewed_by = reviewed_by
        review.reviewed_at = datetime.utcnow()

    await db.commit()
    return await get_review(db, review_id)


async def delete_review(db: AsyncSession, review_id: str):
    review = await get_review(db, review_id)
    if review:
        await db.delete(review)
        await db.commit()
    return review
