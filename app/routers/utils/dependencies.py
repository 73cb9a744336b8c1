from fastapi import Request

from app.config import Settings


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the Settings the application was built with."""
    return request.app.state.settings
