"""Shopping-list endpoints: build, corrections pushed back to recipe lines, PDF export."""
import logging

from fastapi import APIRouter, Response

from larder.infra.Pantry_Repository import PantryRepository
from larder.infra.Recipe_Repository import RecipeRepository
from larder.infra.Store_Repository import StoreRepository
from larder.infra.pdf_utils import generate_pdf_for_shopping_list
from larder.logic.shopping.list_builder import build_shopping_list
from larder.utilities.validators import (
    AssignStoreInput, BuildShoppingListInput, RenameIngredientInput, ReturnToPantryInput, SetCategoryInput,
)

router = APIRouter(prefix="/api/shopping-list", tags=["shopping-list"])
logger = logging.getLogger(__name__)


@router.post("/build")
def build(payload: BuildShoppingListInput):
    """Aggregate the planned meals of [start, end] and cover what the pantry holds."""
    shopping_list = build_shopping_list(None, payload.start, payload.end,
                                        user_id=payload.user_id, deduct_pantry=payload.deduct_pantry)
    return {"ok": True, **shopping_list.to_dict()}


@router.post("/rename")
def rename(payload: RenameIngredientInput):
    updated = RecipeRepository().rename_ingredient(
        payload.new_name, [s.to_source_id() for s in payload.source_ids])
    return {"ok": True, "updated": updated}


@router.post("/assign-store")
def assign_store(payload: AssignStoreInput):
    updated = RecipeRepository().assign_store(
        payload.store_id, [s.to_source_id() for s in payload.source_ids])
    return {"ok": True, "updated": updated}


@router.post("/set-category")
def set_category(payload: SetCategoryInput):
    updated = RecipeRepository().set_category(
        payload.category, [s.to_source_id() for s in payload.source_ids])
    return {"ok": True, "updated": updated}


@router.post("/return-to-pantry")
def return_to_pantry(payload: ReturnToPantryInput):
    item = PantryRepository().increment(payload.ingredient_norm, payload.qty, payload.unit)
    return {"ok": True, "item": item.to_dict()}


@router.post("/pdf")
def export_pdf(payload: BuildShoppingListInput):
    """PDF of a preview build; pantry stock is never touched."""
    shopping_list = build_shopping_list(None, payload.start, payload.end,
                                        user_id=payload.user_id, deduct_pantry=False)
    names = {s["StoreId"]: s["Name"] for s in StoreRepository().list_stores()}
    pdf_bytes = generate_pdf_for_shopping_list(shopping_list, payload.start, payload.end, names)
    logger.info("Exported shopping list PDF %s..%s", payload.start, payload.end)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=shopping_list_{payload.start}_{payload.end}.pdf"
        },
    )
