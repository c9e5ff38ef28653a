"""FastAPI dependencies. Tests override get_client with a client on a fake transport."""
from seastyle.services.upstream import SeaStyleClient, default_client


def get_client() -> SeaStyleClient:
    return default_client
