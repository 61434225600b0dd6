from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.transaction import unit_of_work

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    with unit_of_work(db):
        db.execute(text("SELECT 1"))
    return {"status": "ok"}
