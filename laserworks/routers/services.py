from fastapi import APIRouter, Depends, status

from ..auth import Identity
from ..dependencies import get_service_manager, require_admin
from ..managers import ServiceManager
from ..schemas import Deleted, ReviewsResponse, ServiceCreate, ServiceResponse, ServicesResponse, ServiceUpdate

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ServicesResponse)
def list_services(services: ServiceManager = Depends(get_service_manager)) -> dict:
    return {"services": services.get_all_services()}


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(service_id: int, services: ServiceManager = Depends(get_service_manager)) -> dict:
    return {"service": services.get_service(service_id)}


@router.get("/{service_id}/reviews", response_model=ReviewsResponse)
def get_service_reviews(service_id: int, services: ServiceManager = Depends(get_service_manager)) -> dict:
    return {"reviews": services.get_service_reviews(service_id)}


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    service_in: ServiceCreate,
    services: ServiceManager = Depends(get_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    service = services.add_service(
        service_in.title, service_in.description, service_in.price, service_in.is_active
    )
    return {"service": service}


@router.patch("/{service_id}/activate", response_model=ServiceResponse)
def activate_service(
    service_id: int,
    services: ServiceManager = Depends(get_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"service": services.activate(service_id)}


@router.patch("/{service_id}/deactivate", response_model=ServiceResponse)
def deactivate_service(
    service_id: int,
    services: ServiceManager = Depends(get_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"service": services.deactivate(service_id)}


@router.patch("/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: int,
    service_update: ServiceUpdate,
    services: ServiceManager = Depends(get_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"service": services.update(service_id, service_update.changes())}


@router.delete("/{service_id}", response_model=Deleted)
def delete_service(
    service_id: int,
    services: ServiceManager = Depends(get_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    services.remove(service_id)
    return {"deleted": service_id}
