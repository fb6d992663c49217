"""/v1/assets - Asset registry endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import AssetIn, AssetSchema
from fintrack.api.errors import http_error
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import AssetRepository
from fintrack.domain.exceptions import RecordNotFoundError

router = APIRouter()


@router.get("/assets", response_model=List[AssetSchema])
def list_assets(db: Session = Depends(get_db)):
    return AssetRepository(db).list_all()


@router.post("/assets", response_model=AssetSchema, status_code=201)
def create_asset(request_body: AssetIn, db: Session = Depends(get_db)):
    asset = AssetRepository(db).create(request_body.model_dump())
    db.commit()
    return asset


@router.put("/assets/{asset_id}", response_model=AssetSchema)
def update_asset(asset_id: str, request_body: AssetIn, request: Request, db: Session = Depends(get_db)):
    """Replace an asset and stamp last_updated with today"""
    try:
        asset = AssetRepository(db).update(asset_id, request_body.model_dump())
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
    return asset


@router.delete("/assets/{asset_id}", status_code=204)
def delete_asset(asset_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        AssetRepository(db).delete(asset_id)
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
