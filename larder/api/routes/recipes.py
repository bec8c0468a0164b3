from fastapi import APIRouter, HTTPException

from larder.infra.Recipe_Repository import RecipeRepository
from larder.logic.shopping.quantity_parser import parse_ingredient_line
from larder.utilities.validators import ParseLineInput, RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
def list_recipes():
    return {"ok": True, "recipes": RecipeRepository().list_recipes()}


@router.post("")
def upsert_recipe(payload: RecipeInput):
    recipe = RecipeRepository().upsert_recipe(payload.title, payload.ingredients, payload.recipe_id)
    return {"ok": True, "recipe": recipe.to_dict()}


@router.get("/{recipe_id}/ingredients")
def recipe_ingredients(recipe_id: str):
    recipe = RecipeRepository().get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"ok": True, "ingredients": [ing.to_dict() for ing in recipe.ingredients]}


@router.post("/parse-line")
def parse_line(payload: ParseLineInput):
    """Parse one free-text ingredient line without saving it."""
    parsed = parse_ingredient_line(payload.text)
    if parsed is None:
        raise HTTPException(status_code=400, detail="Ingredient line is empty")
    return {"ok": True, "parsed": parsed._asdict()}
