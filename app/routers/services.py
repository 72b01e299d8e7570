"""Service visits: history per vehicle/customer, creation with cost totals, attached media."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.schemas.service import ServiceCreate, ServiceMediaOut, ServiceOut
from app.services.record_store import RecordStore
from app.services.service_records import MissingVehicle, VehicleNotFound, create_service_record

router = APIRouter()


@router.get("/services", response_model=list[ServiceOut], summary="All services, most recent first")
def list_services(db: Session = Depends(get_db)):
    return RecordStore(db).list_services()


@router.get("/services/vehicle/{vehicle_id}", response_model=list[ServiceOut], summary="Service history of a vehicle")
def services_for_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return RecordStore(db).get_services_by_vehicle(vehicle_id)


@router.get("/services/customer/{customer_id}", response_model=list[ServiceOut], summary="Services for a customer")
def services_for_customer(customer_id: int, db: Session = Depends(get_db)):
    return RecordStore(db).get_services_by_customer(customer_id)


@router.get("/services/{service_id}", response_model=ServiceOut, summary="Get one service")
def get_service(service_id: int, db: Session = Depends(get_db)):
    service = RecordStore(db).get_service(service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.get("/services/{service_id}/media", response_model=list[ServiceMediaOut], summary="Media attached to a service")
def service_media(service_id: int, db: Session = Depends(get_db)):
    prefix = settings.MEDIA_URL_PREFIX.rstrip("/")
    return [
        ServiceMediaOut(
            id=m.id,
            service_id=m.service_id,
            file_name=m.file_name,
            file_type=m.file_type,
            file_size=m.file_size,
            url=f"{prefix}/{m.relative_path}",
            created_at=m.created_at,
        )
        for m in RecordStore(db).get_service_media(service_id)
    ]


@router.post("/services", response_model=ServiceOut, status_code=201, summary="Record a service visit")
def create_service(body: ServiceCreate, db: Session = Depends(get_db)):
    try:
        return create_service_record(RecordStore(db), body)
    except VehicleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MissingVehicle as e:
        raise HTTPException(status_code=400, detail=str(e))
