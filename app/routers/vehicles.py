"""Vehicles: CRUD, exact plate lookup, and the fuzzy front-desk search."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.schemas.search import VehicleLookupOut, VehicleSearchOut
from app.schemas.vehicle import VehicleCreate, VehicleOut
from app.services.match_resolver import build_vehicle_lookup
from app.services.record_store import RecordStore
from app.services.term_normalizer import InvalidSearchTerm
from app.services.vehicle_search import search_vehicles

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles, newest first")
def list_vehicles(db: Session = Depends(get_db)):
    return RecordStore(db).list_vehicles()


@router.get("/vehicles/search", response_model=VehicleSearchOut, summary="Search vehicles by plate, phone, or name")
def search(
    query: Optional[str] = None,
    q: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_SUGGESTION_LIMIT),
    db: Session = Depends(get_db),
):
    """
    Returns the single vehicle the term identifies (with owner and service
    history) as `match`, plus ranked `suggestions` for near matches.
    `query` and `q` are aliases; `query` wins when both are sent.
    """
    term = query if query is not None else q
    try:
        result = search_vehicles(RecordStore(db), term, limit)
    except InvalidSearchTerm as e:
        raise HTTPException(status_code=400, detail=str(e))
    return VehicleSearchOut.model_validate(result, from_attributes=True)


@router.get("/vehicles/lookup/{plate}", response_model=VehicleLookupOut, summary="Exact plate lookup")
def lookup_vehicle(plate: str, db: Session = Depends(get_db)):
    plate_number = plate.strip()
    if not plate_number:
        raise HTTPException(status_code=400, detail="Plate number is required")
    store = RecordStore(db)
    vehicle = store.get_vehicle_by_plate(plate_number)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return VehicleLookupOut.model_validate(build_vehicle_lookup(store, vehicle), from_attributes=True)


@router.get("/vehicles/customer/{customer_id}", response_model=list[VehicleOut], summary="Vehicles owned by a customer")
def vehicles_for_customer(customer_id: int, db: Session = Depends(get_db)):
    return RecordStore(db).get_vehicles_by_customer(customer_id)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Get one vehicle")
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    vehicle = RecordStore(db).get_vehicle(vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Register a vehicle")
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db)):
    store = RecordStore(db)
    if not store.get_customer(body.customer_id):
        raise HTTPException(status_code=400, detail=f"Customer {body.customer_id} does not exist")
    if store.get_vehicle_by_plate(body.plate_number):
        raise HTTPException(status_code=400, detail=f"Plate {body.plate_number.upper()} already registered")
    return store.create_vehicle(**body.model_dump())


@router.patch("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Update a vehicle")
def update_vehicle(vehicle_id: int, body: VehicleCreate, db: Session = Depends(get_db)):
    store = RecordStore(db)
    if not store.get_vehicle(vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")
    if not store.get_customer(body.customer_id):
        raise HTTPException(status_code=400, detail=f"Customer {body.customer_id} does not exist")
    existing = store.get_vehicle_by_plate(body.plate_number)
    if existing and existing.id != vehicle_id:
        raise HTTPException(status_code=400, detail=f"Plate {body.plate_number.upper()} already registered")
    return store.update_vehicle(vehicle_id, **body.model_dump())


@router.delete("/vehicles/{vehicle_id}", status_code=204, summary="Remove a vehicle")
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    if not RecordStore(db).delete_vehicle(vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return Response(status_code=204)
