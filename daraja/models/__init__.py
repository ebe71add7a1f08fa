from daraja.models.credentials import Credentials
from daraja.models.request import Request, HttpMethod

__all__ = ['Credentials', 'Request', 'HttpMethod']
