"""Domain model for ActivityStreams 2.0 entities with automatic registration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True, kw_only_default=True)
class Entity:
    """Base for domain entities. Subclasses become frozen keyword-only dataclasses.

    Entities holding a mapping (Object, ActorProperties, TermDefsContext) are
    unhashable, as is any entity that nests one of them. All entities compare
    by value.
    """

    kind: ClassVar[str]
    registry: ClassVar[dict[str, type[Entity]]] = {}

    def __init_subclass__(cls, kind: str | None = None) -> None:
        """Register entity subclass under its kind name."""
        dataclass(frozen=True, kw_only=True)(cls)
        cls.kind = kind if kind is not None else cls.__name__

        if (existing := Entity.registry.get(cls.kind)) and existing is not cls:
            msg = (
                f"Kind '{cls.kind}' already registered to {existing}. "
                "Choose a different kind."
            )
            raise ValueError(msg)

        Entity.registry[cls.kind] = cls


# https://www.w3.org/TR/json-ld/#the-context


class DirectIri(Entity):
    """A plain IRI string."""

    value: str


class TypeCoercion(Entity):
    """Expanded term definition: ``{"@id": ..., "@type": ...}``."""

    id: str
    type: str | None = None


type Iri = DirectIri | TypeCoercion


class Context(Entity):
    """Base for the syntactic shapes an ``@context`` value can take."""


class SingleContext(Context):
    """A single IRI or type coercion."""

    iri: Iri


class MixContext(Context):
    """An ordered list of contexts, possibly of different shapes."""

    contexts: tuple[Context, ...] = ()


class TermDefsContext(Context):
    """A mapping from term names to IRIs."""

    terms: Mapping[str, Iri] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]


class Key(Entity):
    """Public key attached to an actor.

    See https://w3c.github.io/vc-data-integrity/vocab/security/vocabulary.html#Key
    """

    id: str
    owner: str
    public_key_pem: str | None = None


class Link(Entity):
    """An ActivityStreams Link. Only ``href`` is required."""

    href: str
    schema_context: Context | None = None
    id: str | None = None
    type: tuple[str, ...] = ()
    height: int | None = None
    hreflang: str | None = None
    media_type: tuple[str, ...] = ()
    rel: tuple[str, ...] = ()
    width: int | None = None

    def is_bare(self) -> bool:
        """Whether this link carries nothing but its ``href``.

        A bare link is written as a plain URI string.
        """
        return (
            self.height is None
            and self.hreflang is None
            and self.id is None
            and not self.media_type
            and not self.rel
            and not self.type
            and self.width is None
        )


class ActorProperties(Entity):
    """Actor-only properties. The four collection URIs are always present together."""

    inbox: str
    outbox: str
    following: str
    followers: str
    preferred_username: str | None = None
    endpoints: Mapping[str, str] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]


class Object(Entity):
    """Any ActivityStreams object.

    Every vocabulary layer (Object, Actor, Activity, Collection, Place, ...)
    lives in this one type because a document may mix them freely. Fields
    that accept one or many values are tuples, empty when absent.
    """

    schema_context: Context | None = None
    id: str | None = None
    type: tuple[str, ...] = ()

    # https://www.w3.org/ns/activitystreams#Object
    attachment: tuple[ObjectOrLink, ...] = ()
    attributed_to: tuple[ObjectOrLink, ...] = ()
    audience: tuple[ObjectOrLink, ...] = ()
    bcc: tuple[ObjectOrLink, ...] = ()
    bto: tuple[ObjectOrLink, ...] = ()
    cc: tuple[ObjectOrLink, ...] = ()
    context: tuple[ObjectOrLink, ...] = ()
    generator: tuple[ObjectOrLink, ...] = ()
    icon: tuple[ObjectOrLink, ...] = ()
    image: tuple[ObjectOrLink, ...] = ()
    in_reply_to: tuple[ObjectOrLink, ...] = ()
    location: tuple[ObjectOrLink, ...] = ()
    preview: tuple[ObjectOrLink, ...] = ()
    replies: Object | None = None
    tag: tuple[ObjectOrLink, ...] = ()
    to: tuple[ObjectOrLink, ...] = ()
    url: Link | None = None
    content: tuple[str, ...] = ()
    content_map: Mapping[str, str] = field(default_factory=dict)
    name: tuple[str, ...] = ()
    name_map: Mapping[str, str] = field(default_factory=dict)
    duration: str | None = None
    media_type: tuple[str, ...] = ()
    end_time: datetime | None = None
    published: datetime | None = None
    summary: tuple[str, ...] = ()
    summary_map: Mapping[str, str] = field(default_factory=dict)
    updated: datetime | None = None
    describes: Object | None = None

    # https://www.w3.org/ns/activitystreams#Actor
    actor_properties: ActorProperties | None = None

    # https://www.w3.org/ns/activitystreams#Activity
    actor: tuple[ObjectOrLink, ...] = ()
    instrument: tuple[ObjectOrLink, ...] = ()
    origin: tuple[ObjectOrLink, ...] = ()
    object: tuple[ObjectOrLink, ...] = ()
    result: tuple[ObjectOrLink, ...] = ()
    target: tuple[ObjectOrLink, ...] = ()

    # https://www.w3.org/ns/activitystreams#Collection
    total_items: int | None = None
    current: ObjectOrLink | None = None
    first: ObjectOrLink | None = None
    last: ObjectOrLink | None = None
    items: tuple[ObjectOrLink, ...] = ()

    # https://www.w3.org/ns/activitystreams#OrderedCollection
    ordered_items: tuple[ObjectOrLink, ...] = ()

    # https://www.w3.org/ns/activitystreams#CollectionPage
    next: ObjectOrLink | None = None
    prev: ObjectOrLink | None = None
    part_of: ObjectOrLink | None = None

    # https://www.w3.org/ns/activitystreams#OrderedCollectionPage
    start_index: int | None = None

    # https://www.w3.org/ns/activitystreams#Relationship
    subject: ObjectOrLink | None = None
    relationship: tuple[ObjectOrLink, ...] = ()

    # https://www.w3.org/ns/activitystreams#Tombstone
    former_type: tuple[str, ...] = ()
    deleted: datetime | None = None

    # https://www.w3.org/ns/activitystreams#Question
    one_of: tuple[ObjectOrLink, ...] = ()
    any_of: tuple[ObjectOrLink, ...] = ()
    closed: Any = None

    # https://www.w3.org/ns/activitystreams#Place
    accuracy: float | None = None
    altitude: float | None = None
    latitute: float | None = None
    longitute: float | None = None
    radius: float | None = None
    units: str | None = None

    # https://docs.joinmastodon.org/spec/activitypub/#as
    manually_approves_followers: bool | None = None
    also_known_as: tuple[str, ...] = ()
    moved_to: str | None = None
    sensitive: bool | None = None

    # http://joinmastodon.org/ns
    featured: str | None = None
    featured_tags: str | None = None
    discoverable: bool | None = None
    suspended: bool | None = None
    devices: str | None = None

    # https://w3id.org/security/v1
    public_key: Key | None = None

    # https://schema.org/PropertyValue
    value: str | None = None

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_actor(self) -> bool:
        """Whether the actor sub-record is present."""
        return self.actor_properties is not None


type ObjectOrLink = Object | Link
