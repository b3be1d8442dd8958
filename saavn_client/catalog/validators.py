"""
Minimal-validity checks for normalized entities.

An entity is usable only when its identifying fields are non-empty strings:
id plus title (songs, albums, playlists) or name (artists). Anything else
is reported to the caller as NOT_FOUND.
"""

from typing import Any

from saavn_client.core.exceptions import NotFoundError


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def is_valid_entity(entity: Any) -> bool:
    """
    True when entity has a non-empty id and a non-empty title or name.

    Artists are identified by name, everything else by title.
    """
    if entity is None or not _non_empty(getattr(entity, "id", None)):
        return False
    label = getattr(entity, "name", None) if hasattr(entity, "name") else getattr(entity, "title", None)
    return _non_empty(label)


def ensure_valid(entity: Any, entity_type: str, **context: Any) -> Any:
    """
    Return entity unchanged, or raise NotFoundError if it is not valid.

    Args:
        entity: A normalized entity.
        entity_type: "song", "album", "artist" or "playlist", used in the
                     error message.
        **context: Extra context for the error (id, url, ...).
    """
    if not is_valid_entity(entity):
        raise NotFoundError(
            f"{entity_type.capitalize()} not found",
            context={"entity_type": entity_type, **context},
        )
    return entity
