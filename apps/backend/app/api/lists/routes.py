"""List view API routes."""

from fastapi import APIRouter, HTTPException, Request, status

from app.api.lists.models import (
    CardsResponse,
    ListViewResponse,
    NavigationItem,
    NavigationResponse,
)
from app.core.dependencies import ContentServiceDep, RegistryDep
from polldesk.core.content import (
    ContentError,
    ItemNotFoundError,
    UnknownListError,
)

router = APIRouter()


@router.get("", response_model=NavigationResponse)
async def get_navigation(registry: RegistryDep) -> NavigationResponse:
    """
    Get the lists shown in admin navigation.

    Hidden lists are left out.
    """
    return NavigationResponse(
        lists=[
            NavigationItem(
                key=list_key,
                label_field=registry.label_field(list_key),
                initial_columns=list(registry.initial_columns(list_key)),
            )
            for list_key in registry.navigation()
        ]
    )


@router.get("/{list_key}/items", response_model=ListViewResponse)
def get_list_view(
    list_key: str,
    request: Request,
    service: ContentServiceDep,
) -> ListViewResponse:
    """
    Render the list view of a list.

    Query parameters are equality filters on filterable fields or single
    relationships (by related id), e.g. ``?district=<id>``.

    Raises:
        HTTPException 404: If the list or a filtered related item is unknown.
        HTTPException 400: If a filter is not allowed.
    """
    where = dict(request.query_params)
    try:
        page = service.list_view(list_key, where=where)
    except (UnknownListError, ItemNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ListViewResponse(
        list_key=page.list_key,
        columns=list(page.columns),
        rows=list(page.rows),
    )


@router.get("/{list_key}/items/{item_id}/{field}", response_model=CardsResponse)
def get_cards(
    list_key: str,
    item_id: str,
    field: str,
    service: ContentServiceDep,
) -> CardsResponse:
    """
    Render a relationship of an item as cards.

    Raises:
        HTTPException 404: If the list or item is unknown.
        HTTPException 400: If the field is not displayed as cards.
    """
    try:
        cards = service.cards(list_key, item_id, field)
    except (UnknownListError, ItemNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return CardsResponse(list_key=list_key, item_id=item_id, field=field, cards=cards)
