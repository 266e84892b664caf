from fastapi import APIRouter
from pydantic import BaseModel

from mathquest.cards.catalog import get_category, list_categories
from mathquest.core.errors import NotFoundError

router = APIRouter(prefix="/api/memory-cards", tags=["memory-cards"])


class CardSide(BaseModel):
    title: str
    content: str


class MemoryCard(BaseModel):
    front: CardSide
    back: CardSide


class CardCategory(BaseModel):
    name: str
    cards: list[MemoryCard]


@router.get("", response_model=list[CardCategory])
def memory_cards():
    return list_categories()


@router.get("/{category}", response_model=CardCategory)
def memory_card_category(category: str):
    found = get_category(category)
    if not found:
        raise NotFoundError(f"No memory cards for '{category}'")
    return found
