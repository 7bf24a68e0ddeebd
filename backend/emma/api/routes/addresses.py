import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import commit_or_400, envelope, get_or_404, search_clause
from emma.models import Address
from emma.schemas.addresses import AddressCreate, AddressRead, AddressStats, AddressUpdate
from emma.schemas.envelope import Envelope

router = APIRouter()


@router.get("/", response_model=Envelope[list[AddressRead]])
def list_addresses(search: str | None = None, db: Session = Depends(get_db)) -> dict:
    stmt = select(Address).order_by(Address.created_at.desc())
    if search:
        stmt = stmt.where(
            search_clause(
                search,
                Address.address_1,
                Address.address_2,
                Address.city,
                Address.state,
                Address.postal_code,
                Address.country,
            )
        )
    addresses = list(db.scalars(stmt))
    return envelope(addresses, count=len(addresses))


@router.get("/stats", response_model=Envelope[AddressStats])
def address_stats(db: Session = Depends(get_db)) -> dict:
    total = db.scalar(select(func.count()).select_from(Address)) or 0
    return envelope({"total": total})


@router.post("/", response_model=Envelope[AddressRead], status_code=status.HTTP_201_CREATED)
def create_address(payload: AddressCreate, db: Session = Depends(get_db)) -> dict:
    address = Address(**payload.model_dump())
    db.add(address)
    db.commit()
    db.refresh(address)
    return envelope(address, message="Address created successfully")


@router.get("/{address_id}", response_model=Envelope[AddressRead])
def get_address(address_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Address, address_id, "Address"))


@router.put("/{address_id}", response_model=Envelope[AddressRead])
def update_address(
    address_id: uuid.UUID, payload: AddressUpdate, db: Session = Depends(get_db)
) -> dict:
    address = get_or_404(db, Address, address_id, "Address")
    with commit_or_400(db, "Failed to update address"):
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(address, key, value)
    db.refresh(address)
    return envelope(address, message="Address updated successfully")


@router.delete("/{address_id}", response_model=Envelope[AddressRead])
def delete_address(address_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    address = get_or_404(db, Address, address_id, "Address")
    deleted = AddressRead.model_validate(address)
    with commit_or_400(db, "Failed to delete address"):
        db.delete(address)
    return envelope(deleted, message="Address deleted successfully")
