"""Customers: CRUD. A phone number, compared on its digits, identifies one customer."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.customer import CustomerCreate, CustomerOut
from app.services.record_store import RecordStore

router = APIRouter()


@router.get("/customers", response_model=list[CustomerOut], summary="List customers, newest first")
def list_customers(db: Session = Depends(get_db)):
    return RecordStore(db).list_customers()


@router.get("/customers/{customer_id}", response_model=CustomerOut, summary="Get one customer")
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    customer = RecordStore(db).get_customer(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.post("/customers", response_model=CustomerOut, status_code=201, summary="Create a customer")
def create_customer(body: CustomerCreate, db: Session = Depends(get_db)):
    store = RecordStore(db)
    if store.get_customer_by_normalized_phone(body.phone):
        raise HTTPException(status_code=400, detail="Customer with this phone number already exists")
    return store.create_customer(**body.model_dump())


@router.patch("/customers/{customer_id}", response_model=CustomerOut, summary="Update a customer")
def update_customer(customer_id: int, body: CustomerCreate, db: Session = Depends(get_db)):
    store = RecordStore(db)
    existing = store.get_customer_by_normalized_phone(body.phone)
    if existing and existing.id != customer_id:
        raise HTTPException(status_code=400, detail="Customer with this phone number already exists")
    customer = store.update_customer(customer_id, **body.model_dump())
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.delete("/customers/{customer_id}", status_code=204, summary="Delete a customer")
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    if not RecordStore(db).delete_customer(customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    return Response(status_code=204)
