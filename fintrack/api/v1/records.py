"""
Shared income/expense endpoints

Income and expense have identical routes; `build_records_router` wires them
for one kind with that kind's request/response models.
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.deps import Identity, get_current_identity, get_db
from fintrack.api.v1.schemas import MAX_ID, MessageResponse
from fintrack.application.records import RecordService
from fintrack.domain.record import RecordFilter


def build_records_router(
    kind: str,
    request_model: type[BaseModel],
    response_model: type[BaseModel],
    date_field: str,
) -> APIRouter:
    router = APIRouter(prefix=f"/api/v1/{kind}", tags=[kind])

    def to_response(record) -> BaseModel:
        return response_model(
            id=record.id,
            user_id=record.user_id,
            category_id=record.category_id,
            category_name=record.category.name,
            amount=float(record.amount),
            description=record.description,
            created_at=record.created_at,
            updated_at=record.updated_at,
            **{date_field: getattr(record, date_field)},
        )

    def get_filters(
        category_id: int | None = Query(None, ge=1, le=MAX_ID),
        on_date: date_type | None = Query(None, alias="date"),
        start_date: date_type | None = Query(None),
        end_date: date_type | None = Query(None),
    ) -> RecordFilter:
        return RecordFilter(
            category_id=category_id,
            date=on_date,
            start_date=start_date,
            end_date=end_date,
        )

    @router.get("", response_model=list[response_model])
    def list_records(
        filters: RecordFilter = Depends(get_filters),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ):
        records = RecordService(db, kind).list_records(identity.user_id, filters)
        return [to_response(r) for r in records]

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    def create_record(
        req: request_model,
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ):
        record = RecordService(db, kind).create(
            user_id=identity.user_id,
            category_id=req.category_id,
            amount=req.amount,
            record_date=getattr(req, date_field),
            description=req.description,
        )
        return to_response(record)

    @router.get("/{record_id}", response_model=response_model)
    def get_record(
        record_id: int = Path(ge=1, le=MAX_ID),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ):
        record = RecordService(db, kind).get(record_id, identity.user_id)
        return to_response(record)

    @router.put("/{record_id}", response_model=response_model)
    def update_record(
        req: request_model,
        record_id: int = Path(ge=1, le=MAX_ID),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ):
        record = RecordService(db, kind).update(
            record_id=record_id,
            user_id=identity.user_id,
            category_id=req.category_id,
            amount=req.amount,
            record_date=getattr(req, date_field),
            description=req.description,
        )
        return to_response(record)

    @router.delete("/{record_id}", response_model=MessageResponse)
    def delete_record(
        record_id: int = Path(ge=1, le=MAX_ID),
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ):
        RecordService(db, kind).delete(record_id, identity.user_id)
        return MessageResponse(message=f"{kind} deleted successfully")

    return router
