"""
Hypermedia links for registry responses.

Links are resolved from route names with ``request.url_for`` so they follow
the mount prefix and host of the incoming request.
"""
from fastapi import Request

from src.registry.core.domain.models import Animal, Owner
from src.client.schemas import Link


def _link(request: Request, route_name: str, **path_params) -> Link:
    return Link(href=str(request.url_for(route_name, **path_params)))


def animal_links(request: Request, animal: Animal) -> dict[str, Link]:
    """Links for a single animal; the owner links depend on whether it has one."""
    self_link = _link(request, "get_animal", animal_id=animal.id)
    links = {
        "self": self_link,
        "all-animals": _link(request, "list_animals"),
        "update": self_link,
        "delete": self_link,
    }
    if animal.has_owner:
        links["owner"] = _link(request, "get_owner", owner_id=animal.owner_id)
        links["remove-owner"] = _link(request, "remove_owner", animal_id=animal.id)
    else:
        links["available-for-adoption"] = _link(request, "available_for_adoption")
    return links


def owner_links(request: Request, owner: Owner) -> dict[str, Link]:
    """Links for a single owner; activation and animal links follow its state."""
    self_link = _link(request, "get_owner", owner_id=owner.id)
    links = {
        "self": self_link,
        "all-owners": _link(request, "list_owners"),
        "update": self_link,
        "delete": self_link,
        "animals": _link(request, "owner_animals", owner_id=owner.id),
    }
    if owner.is_active:
        links["deactivate"] = _link(request, "deactivate_owner", owner_id=owner.id)
    else:
        links["activate"] = _link(request, "activate_owner", owner_id=owner.id)
    if owner.has_animals:
        links["owners-with-animals"] = _link(request, "owners_with_animals")
    else:
        links["owners-without-animals"] = _link(request, "owners_without_animals")
    return links


def animal_collection_links(request: Request, root: bool = False) -> dict[str, Link]:
    links = {"self": Link(href=str(request.url))}
    if root:
        links["available-for-adoption"] = _link(request, "available_for_adoption")
        links["puppies"] = _link(request, "puppies")
    else:
        links["all-animals"] = _link(request, "list_animals")
    return links


def owner_collection_links(request: Request, root: bool = False) -> dict[str, Link]:
    links = {"self": Link(href=str(request.url))}
    if root:
        links["owners-with-animals"] = _link(request, "owners_with_animals")
        links["owners-without-animals"] = _link(request, "owners_without_animals")
    else:
        links["all-owners"] = _link(request, "list_owners")
    return links
