"""
Input validation schemas using Pydantic for request payloads.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from larder.domain.IngredientLine import SourceId


class _Payload(BaseModel):
    """Accepts both the camelCase wire names and the Python field names."""
    model_config = ConfigDict(populate_by_name=True)


class SourceIdInput(_Payload):
    """One (recipe, line) provenance pair."""
    rid: str = Field(..., min_length=1)
    idx: int = Field(..., ge=0)

    def to_source_id(self) -> SourceId:
        return SourceId(self.rid, self.idx)


class BuildShoppingListInput(_Payload):
    """Schema for a shopping-list build request."""
    start: date
    end: date
    user_id: Optional[int] = Field(None, alias='userId')
    deduct_pantry: bool = Field(True, alias='deductPantry')

    @model_validator(mode='after')
    def check_range(self):
        if self.end < self.start:
            raise ValueError('end date must not be before start date')
        return self


class RenameIngredientInput(_Payload):
    """Schema for re-labelling every ingredient line of a merged row."""
    new_name: str = Field(..., alias='newName', max_length=200)
    source_ids: List[SourceIdInput] = Field(..., alias='sourceIds', min_length=1)

    @field_validator('new_name')
    @classmethod
    def validate_name(cls, v):
        """Reject blank names."""
        if not v or not v.strip():
            raise ValueError('newName cannot be empty')
        return v.strip()


class AssignStoreInput(_Payload):
    """Schema for pushing a store choice back to the contributing ingredient lines."""
    store_id: str = Field('', alias='storeId', max_length=100)
    source_ids: List[SourceIdInput] = Field(..., alias='sourceIds', min_length=1)

    @field_validator('store_id')
    @classmethod
    def strip_whitespace(cls, v):
        return (v or '').strip()


class ReturnToPantryInput(_Payload):
    """Schema for returning an unpurchased amount to the pantry."""
    ingredient_norm: str = Field(..., alias='ingredientNorm', min_length=1)
    qty: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=20)

    @field_validator('ingredient_norm', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('value cannot be blank')
        return v


class PantryItemInput(_Payload):
    """Schema for creating or updating a pantry stock row."""
    item_id: Optional[str] = Field(None, alias='itemId')
    name: str = Field(..., min_length=1, max_length=100)
    qty_num: Optional[float] = Field(None, alias='qtyNum', ge=0)
    unit: str = Field('', max_length=20)
    qty_text: str = Field('', alias='qtyText', max_length=100)
    low_stock_threshold: Optional[float] = Field(None, ge=0)
    expiration_date: Optional[date] = None
    store_id: str = Field('', alias='storeId')
    category: str = ''
    notes: str = ''

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('name required')
        return v


class StoreInput(_Payload):
    """Schema for adding a store."""
    name: str = Field(..., min_length=1, max_length=100)
    priority: int = Field(999, ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Store name is required')
        return v.strip()


class RecipeInput(_Payload):
    """Schema for a recipe and its free-text ingredient lines."""
    recipe_id: Optional[str] = Field(None, alias='recipeId')
    title: str = Field(..., min_length=1, max_length=200)
    ingredients: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('ingredients')
    @classmethod
    def drop_blank_lines(cls, v):
        """Filter out empty lines."""
        return [line.strip() for line in v if line and line.strip()]


class PlanMealInput(_Payload):
    """Schema for scheduling a recipe on a date/slot."""
    day: date = Field(..., alias='date')
    slot: str = Field(..., pattern=r'^(breakfast|lunch|dinner)$')
    recipe_id: str = Field(..., alias='recipeId', min_length=1)
    user_id: Optional[int] = Field(None, alias='userId')
    additional: bool = False


class ParseLineInput(_Payload):
    text: str = Field(..., max_length=500)


class SetCategoryInput(_Payload):
    """Schema for pushing a category correction back to the contributing ingredient lines."""
    category: str = Field(..., min_length=1, max_length=50)
    source_ids: List[SourceIdInput] = Field(..., alias='sourceIds', min_length=1)

    @field_validator('category')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('category cannot be blank')
        return v
