"""
Collection registry: which slugs the document store serves and how.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Type

from app.core.constants import CollectionSlugs
from app.core.exceptions import UnknownCollectionError
from app.models.domain import (
    Base,
    Chat,
    Document,
    Message,
    Stream,
    Suggestion,
    User,
    Vote,
)
from app.models.hooks import CollectionHooks


@dataclass
class CollectionConfig:
    """One persisted collection."""

    slug: str
    model: Type[Base]
    hooks: CollectionHooks = field(default_factory=CollectionHooks)

    # Binary uploads backing another collection
    upload: bool = False

    # Not shown in admin listings
    hidden: bool = False


@dataclass
class StoreConfig:
    """Collections served by the store plus per-plugin settings."""

    collections: List[CollectionConfig] = field(default_factory=list)
    plugins: Dict[str, Any] = field(default_factory=dict)

    def has(self, slug: str) -> bool:
        return any(c.slug == slug for c in self.collections)

    def get(self, slug: str) -> CollectionConfig:
        for collection in self.collections:
            if collection.slug == slug:
                return collection
        raise UnknownCollectionError(slug)

    @property
    def slugs(self) -> List[str]:
        return [c.slug for c in self.collections]


# A plugin takes the configuration and returns the extended configuration
Plugin = Callable[[StoreConfig], StoreConfig]


def default_store_config() -> StoreConfig:
    """First-party collections of the chat application."""
    return StoreConfig(
        collections=[
            CollectionConfig(slug=CollectionSlugs.USERS, model=User),
            CollectionConfig(slug=CollectionSlugs.CHATS, model=Chat),
            CollectionConfig(slug=CollectionSlugs.MESSAGES, model=Message),
            CollectionConfig(slug=CollectionSlugs.VOTES, model=Vote),
            CollectionConfig(slug=CollectionSlugs.DOCUMENTS, model=Document),
            CollectionConfig(slug=CollectionSlugs.SUGGESTIONS, model=Suggestion),
            CollectionConfig(slug=CollectionSlugs.STREAMS, model=Stream),
        ]
    )


def build_store_config(plugins: Iterable[Plugin] = ()) -> StoreConfig:
    """Apply plugins, in order, to the default configuration."""
    config = default_store_config()
    for plugin in plugins:
        config = plugin(config)
    return config
