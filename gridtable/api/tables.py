from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from gridtable.db import get_db
from gridtable.schemas.table import TableListResponse, TableResponse
from gridtable.services.tables import TableRegistry

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=TableListResponse)
def list_tables():
    return TableListResponse(tables=TableRegistry.keys())


@router.get("/{table_key}", response_model=TableResponse)
def render_table(
    table_key: str,
    request: Request,
    db: Session = Depends(get_db),
):
    table = TableRegistry.get(table_key)()
    return table.render(request, db)
