# api/pages.py
# Server-rendered pages, including the analytics dashboard.

import logging
from pathlib import Path
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealprep import analytics
from mealprep.db.session import get_db

router = APIRouter()

logger = logging.getLogger(__name__)

templates_dir = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


def render_dashboard(request: Request, chart_data=None, selected_query=None, error=None, status_code=200):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "chart_data": chart_data.model_dump(by_alias=True) if chart_data is not None else None,
            "selected_query": selected_query,
            "queries": analytics.ANALYTICS_QUERIES.values(),
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request):
    return render_dashboard(request)


@router.get("/search-page", response_class=HTMLResponse)
def search_page(request: Request):
    return templates.TemplateResponse(request, "search.html", {})


@router.get("/meal-planner", response_class=HTMLResponse)
def meal_planner_page(request: Request):
    return templates.TemplateResponse(request, "meal-planner.html", {})


@router.get("/favorites-page", response_class=HTMLResponse)
def favorites_page(request: Request):
    return templates.TemplateResponse(request, "favorites.html", {})


@router.get("/query", response_class=HTMLResponse)
def dashboard_query(request: Request, query: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Render the dashboard with the chart for one of the canned analytics queries.
    Unknown query identifiers go back to the dashboard home.
    """
    analytics_query = analytics.get_query(query)
    if analytics_query is None:
        logger.warning(f"Unknown dashboard query {query!r}, redirecting home")
        return RedirectResponse(url=request.url_for("dashboard"))

    try:
        chart_data = analytics.run_query(db, analytics_query)
    except SQLAlchemyError:
        logger.exception(f"Error running dashboard query {analytics_query.key}")
        return render_dashboard(
            request,
            chart_data=analytics_query.empty_chart(),
            selected_query=analytics_query.key,
            error="An error occurred while loading the chart.",
            status_code=500,
        )

    return render_dashboard(request, chart_data=chart_data, selected_query=analytics_query.key)
