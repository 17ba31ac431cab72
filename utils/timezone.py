from datetime import datetime
import pytz

from config import HOTEL_TIMEZONE

# Las fechas se persisten como UTC naive y "hoy" es el día UTC; la zona
# del hotel solo se usa para mostrar fechas al huésped.
HOTEL_TZ = pytz.timezone(HOTEL_TIMEZONE)


def utc_now() -> datetime:
    """Returns current UTC time as a naive datetime"""
    return datetime.utcnow()


def to_utc_naive(dt: datetime) -> datetime:
    """Normalizes an incoming datetime to naive UTC"""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.utc).replace(tzinfo=None)


def to_hotel_time(dt: datetime) -> datetime:
    """Converts a datetime to Hotel Timezone"""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt).astimezone(HOTEL_TZ)
    return dt.astimezone(HOTEL_TZ)


def inicio_de_hoy_utc() -> datetime:
    """Midnight of the current UTC day (date-only inputs are parsed as UTC midnight)"""
    return utc_now().replace(hour=0, minute=0, second=0, microsecond=0)


def formatear_fecha(dt: datetime) -> str:
    """dd/mm/yyyy in Hotel Timezone, as shown in documents and emails"""
    return to_hotel_time(dt).strftime("%d/%m/%Y")
