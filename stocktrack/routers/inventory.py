# stocktrack/routers/inventory.py

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from stocktrack.core.rate_limiter import (
    limiter,
    rate_limit_disabled,
    stock_limit_key,
    stock_rate_limit,
)
from stocktrack.database import get_db
from stocktrack.schemas.common import DataResponse, ListResponse, MessageResponse
from stocktrack.schemas.inventory import (
    InventoryStats,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    StockAdjust,
)
from stocktrack.services.alert_reconciler import reconcile_after_write
from stocktrack.services.item_store import ItemStore

router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
)


@router.get("", response_model=ListResponse[ItemResponse])
def list_items(
    category: str | None = Query(None),
    low_stock: bool = Query(False),
    db: Session = Depends(get_db),
):
    items = ItemStore(db).list(category=category, low_stock=low_stock)

    return ListResponse[ItemResponse](
        count=len(items),
        data=[ItemResponse.model_validate(item) for item in items],
    )


@router.get("/stats", response_model=DataResponse[InventoryStats])
def inventory_stats(db: Session = Depends(get_db)):
    return DataResponse[InventoryStats](data=InventoryStats(**ItemStore(db).stats()))


@router.get("/{item_id}", response_model=DataResponse[ItemResponse])
def get_item(item_id: int, db: Session = Depends(get_db)):
    item = ItemStore(db).get(item_id)

    return DataResponse[ItemResponse](data=ItemResponse.model_validate(item))


@router.post(
    "",
    response_model=DataResponse[ItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_item(item_data: ItemCreate, db: Session = Depends(get_db)):
    store = ItemStore(db)

    item = store.create(item_data.model_dump())
    reconcile_after_write(db, item.id)

    return DataResponse[ItemResponse](
        message="Item created successfully",
        data=ItemResponse.model_validate(store.get(item.id)),
    )


@router.put("/{item_id}", response_model=DataResponse[ItemResponse])
def update_item(
    item_id: int,
    item_data: ItemUpdate,
    db: Session = Depends(get_db),
):
    store = ItemStore(db)

    item = store.update(item_id, item_data.model_dump(exclude_unset=True))
    reconcile_after_write(db, item.id)

    return DataResponse[ItemResponse](
        message="Item updated successfully",
        data=ItemResponse.model_validate(store.get(item.id)),
    )


@router.patch("/{item_id}/stock", response_model=DataResponse[ItemResponse])
@limiter.limit(
    stock_rate_limit,
    key_func=stock_limit_key,
    exempt_when=rate_limit_disabled,
)
def adjust_stock(
    request: Request,
    item_id: int,
    stock_data: StockAdjust,
    db: Session = Depends(get_db),
):
    store = ItemStore(db)

    item = store.adjust_stock(item_id, stock_data.quantity, stock_data.operation)
    reconcile_after_write(db, item.id)

    return DataResponse[ItemResponse](
        message="Stock updated successfully",
        data=ItemResponse.model_validate(store.get(item.id)),
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    ItemStore(db).delete(item_id)

    return MessageResponse(message="Item deleted successfully")
