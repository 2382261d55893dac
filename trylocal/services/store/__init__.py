from .base import BusinessRepository
from .memory import InMemoryBusinessRepository
from .factory import get_business_repository

__all__ = [
    'BusinessRepository',
    'InMemoryBusinessRepository',
    'get_business_repository',
]
