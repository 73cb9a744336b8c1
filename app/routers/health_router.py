"""Liveness and database health checks."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.db import Database, get_database
from app.exceptions import error_detail

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("")
def health() -> dict:
    return {"ok": True}


@router.get("/db")
def health_db(database: Database = Depends(get_database)):
    """Round-trip to the database and return its clock."""
    try:
        now = database.check_connection()
    except SQLAlchemyError as e:
        return JSONResponse(status_code=500, content={"ok": False, "error": error_detail(e)})
    return {"ok": True, "time": now}
