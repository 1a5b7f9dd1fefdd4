# api/meal_planner.py
# Handles the weekly meal planner: saving slots, listing them and clearing the plan.

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealprep import crud
from mealprep import schemas
from mealprep.db.session import get_db

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/save", response_model=schemas.ActionResult)
def save_meal_plan(entry: schemas.MealPlanSave, db: Session = Depends(get_db)):
    """
    Assign a recipe to a (day, meal) slot, replacing any previous assignment.
    """
    logger.debug(f"Saving {entry.day}/{entry.meal} -> recipe {entry.recipe_id}")
    try:
        if crud.get_recipe(db, entry.recipe_id) is None:
            logger.warning(f"Recipe with ID {entry.recipe_id} not found.")
            raise HTTPException(status_code=404, detail="Recipe not found")
        crud.save_meal_plan_entry(db, day=entry.day, meal_type=entry.meal, recipe_id=entry.recipe_id)
    except SQLAlchemyError:
        logger.exception("Error saving meal plan")
        raise HTTPException(status_code=500, detail="Error saving meal plan.")

    return schemas.ActionResult(success=True, message="Meal plan saved successfully.")


@router.get("/fetch", response_model=schemas.MealPlan)
def fetch_meal_plan(db: Session = Depends(get_db)):
    try:
        rows = crud.get_meal_plan(db)
    except SQLAlchemyError:
        logger.exception("Error fetching meal plan")
        raise HTTPException(status_code=500, detail="Error fetching meal plan.")

    return schemas.MealPlan(meal_plan=[schemas.MealPlanItem.model_validate(row) for row in rows])


@router.post("/clear", response_model=schemas.ActionResult)
def clear_meal_plan(db: Session = Depends(get_db)):
    try:
        deleted = crud.clear_meal_plan(db)
    except SQLAlchemyError:
        logger.exception("Error clearing meal plan")
        raise HTTPException(status_code=500, detail="Error clearing meal plan.")

    logger.info(f"Meal plan cleared ({deleted} entries)")
    return schemas.ActionResult(success=True, message="Meal plan cleared successfully.")
