"""Sea-Style upstream: client, strategy chains and the month batch. Validation in the client; transport just sends."""
from seastyle.services.upstream.base import CancelSignal, Fetched, Transport
from seastyle.services.upstream.batch import DayOutcome, fetch_month_availability, month_days
from seastyle.services.upstream.chain import ChainOutcome, Strategy, first_success
from seastyle.services.upstream.client import HttpxTransport, SeaStyleClient
from seastyle.services.upstream.config import SeaStyleConfig

default_client = SeaStyleClient()

__all__ = [
    "CancelSignal",
    "ChainOutcome",
    "DayOutcome",
    "Fetched",
    "HttpxTransport",
    "SeaStyleClient",
    "SeaStyleConfig",
    "Strategy",
    "Transport",
    "default_client",
    "fetch_month_availability",
    "first_success",
    "month_days",
]
