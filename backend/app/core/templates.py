"""
Template rendering utilities
"""
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

# backend/app/core/templates.py -> project root
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
TEMPLATES_DIR = BASE_DIR / "frontend" / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_template(template_name: str, context: dict, request: Request, status_code: Optional[int] = None):
    """Render template with context"""
    return templates.TemplateResponse(
        request,
        template_name,
        context,
        status_code=status_code or 200,
    )
