"""Schema API routes."""

from fastapi import APIRouter

from app.api.schema.models import SchemaResponse
from app.core.dependencies import RegistryDep

router = APIRouter()


@router.get("", response_model=SchemaResponse)
async def get_schema(registry: RegistryDep) -> dict:
    """
    Get the declared schema.

    Returns every list with its fields, relationships and UI hints.
    """
    return registry.to_dict()
