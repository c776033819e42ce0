"""
hoe-api: відключення електроенергії з сайту hoe.com.ua (Хмельницькобленерго)
"""

from hoe_api.client import HoeApiClient, create_client
from hoe_api.exceptions import ErrorKind, HoeApiError, ParseError, StructureError, TransportError
from hoe_api.models import (
    ActiveOutage,
    Image,
    NoImage,
    NoOutage,
    OutageType,
    Pem,
    PowerCutEvent,
    PowerOutageKind,
    Settlement,
    Street,
    StreetGroup,
)
from hoe_api.result import Error, Ok, Result

__all__ = [
    'HoeApiClient',
    'create_client',
    'ErrorKind',
    'HoeApiError',
    'ParseError',
    'StructureError',
    'TransportError',
    'ActiveOutage',
    'Image',
    'NoImage',
    'NoOutage',
    'OutageType',
    'Pem',
    'PowerCutEvent',
    'PowerOutageKind',
    'Settlement',
    'Street',
    'StreetGroup',
    'Error',
    'Ok',
    'Result',
]
