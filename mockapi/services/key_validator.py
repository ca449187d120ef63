# mockapi/services/key_validator.py
from mockapi.services.registry import EndpointRegistry


async def is_valid_key(registry: EndpointRegistry, endpoint_id: str, candidate_key: str) -> bool:
    """True when a stored key for the endpoint equals candidate_key exactly."""
    matches = await registry.find_access_key(endpoint_id, candidate_key)
    return len(matches) > 0
