from fastapi import Depends

from trylocal.services.business import BusinessHoursService
from trylocal.services.payments import PaymentAccountService, PaymentsClient, get_payments_client
from trylocal.services.store import BusinessRepository, get_business_repository


def get_account_service(
    payments: PaymentsClient = Depends(get_payments_client),
    businesses: BusinessRepository = Depends(get_business_repository),
) -> PaymentAccountService:
    return PaymentAccountService(payments=payments, businesses=businesses)


def get_hours_service() -> BusinessHoursService:
    return BusinessHoursService()
