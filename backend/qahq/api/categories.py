"""
Categories API
Fixed category set with display names
"""

from fastapi import APIRouter

from qahq.core.categories import Category, format_category_name

router = APIRouter(prefix="/categories", tags=["Questions"])


@router.get("")
async def list_categories():
    return {
        "items": [
            {"id": c.value, "name": format_category_name(c.value)} for c in Category
        ]
    }
