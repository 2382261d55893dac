from fastapi import APIRouter

from trylocal.api.v1.routers import stripe_connect as stripe_connect_router
from trylocal.api.v1.routers import pickup as pickup_router
from trylocal.api.v1.routers import delivery as delivery_router

router = APIRouter()

# business onboarding
router.include_router(stripe_connect_router.router)

# customer-facing scheduling
router.include_router(pickup_router.router)
router.include_router(delivery_router.router)
