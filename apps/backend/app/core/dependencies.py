"""FastAPI dependencies for database access and content services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_session
from polldesk.core.content import ContentService
from polldesk.core.schema_registry import SchemaRegistry, get_default_registry


def get_registry() -> SchemaRegistry:
    """Dependency returning the process-wide schema registry."""
    return get_default_registry()


def get_content_service(
    session: Annotated[Session, Depends(get_session)],
    registry: Annotated[SchemaRegistry, Depends(get_registry)],
) -> ContentService:
    """Dependency returning a content service bound to the request session."""
    return ContentService(session, registry=registry)


# Type aliases for convenience
RegistryDep = Annotated[SchemaRegistry, Depends(get_registry)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
