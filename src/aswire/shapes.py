"""Wire shapes: flat mirrors of the JSON documents, one field per wire property.

Every field is optional unless declared with ``required=True``. Field names
are Python names; the exact wire property name lives in the field metadata
(see ``wire``), so misspellings used by deployed servers (``attributeTo``,
``latitute``) are kept verbatim on the wire without leaking into Python.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import Field, dataclass, field
from typing import Any, ClassVar, dataclass_transform

from aswire.types import Count, Value

WIRE_NAME = "wire_name"


def wire(name: str, *, required: bool = False) -> Any:
    """Declare a shape field serialized under ``name``."""
    if required:
        return field(metadata={WIRE_NAME: name})
    return field(default=None, metadata={WIRE_NAME: name})


def wire_name(f: Field[Any]) -> str:
    """Wire property name of a shape field."""
    return f.metadata.get(WIRE_NAME, f.name)


@dataclass(frozen=True)
@dataclass_transform(
    frozen_default=True,
    kw_only_default=True,
    field_specifiers=(wire,),
)
class Shape:
    """Base for wire shapes."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Shape]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register shape subclass with automatic tag derivation."""
        dataclass(frozen=True, kw_only=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.removesuffix("Shape")

        if (existing := Shape.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Shape.registry[cls.tag] = cls


class TypeCoercionShape(Shape):
    """Expanded term definition inside ``@context``."""

    id: str = wire("@id", required=True)
    type: str | None = wire("@type")


class KeyShape(Shape):
    """Public key object (``publicKey``)."""

    id: str = wire("id", required=True)
    owner: str = wire("owner", required=True)
    public_key_pem: str | None = wire("publicKeyPem")


class LinkShape(Shape):
    """Link object."""

    schema_context: Value | None = wire("@context")
    id: str | None = wire("id")
    type: Value | None = wire("type")

    # https://www.w3.org/ns/activitystreams#Link
    href: str = wire("href", required=True)
    height: Count | None = wire("height")
    hreflang: str | None = wire("hreflang")
    media_type: Value | None = wire("mediaType")
    rel: Value | None = wire("rel")
    width: Count | None = wire("width")


class ObjectShape(Shape):
    """Object of every vocabulary layer, actor and extension fields flattened."""

    schema_context: Value | None = wire("@context")
    id: str | None = wire("id")
    type: Value | None = wire("type")

    # https://www.w3.org/ns/activitystreams#Object
    attachment: Value | None = wire("attachment")
    attributed_to: Value | None = wire("attributeTo")
    audience: Value | None = wire("audience")
    bcc: Value | None = wire("bcc")
    bto: Value | None = wire("bto")
    cc: Value | None = wire("cc")
    context: Value | None = wire("context")
    generator: Value | None = wire("generator")
    icon: Value | None = wire("icon")
    image: Value | None = wire("image")
    in_reply_to: Value | None = wire("inReplyTo")
    location: Value | None = wire("location")
    preview: Value | None = wire("preview")
    # Range: Collection
    replies: ObjectShape | None = wire("replies")
    tag: Value | None = wire("tag")
    to: Value | None = wire("to")
    url: Value | None = wire("url")
    content: Value | None = wire("content")
    content_map: Mapping[str, str] | None = wire("contentMap")
    name: Value | None = wire("name")
    name_map: Mapping[str, str] | None = wire("nameMap")
    duration: str | None = wire("duration")
    media_type: Value | None = wire("mediaType")
    end_time: str | None = wire("endTime")
    published: str | None = wire("published")
    summary: Value | None = wire("summary")
    summary_map: Mapping[str, str] | None = wire("summaryMap")
    updated: str | None = wire("updated")
    describes: ObjectShape | None = wire("describes")

    # https://www.w3.org/ns/activitystreams#Actor
    inbox: str | None = wire("inbox")
    outbox: str | None = wire("outbox")
    following: str | None = wire("following")
    followers: str | None = wire("followers")
    preferred_username: str | None = wire("preferredUsername")
    endpoints: Mapping[str, str] | None = wire("endpoints")

    # https://www.w3.org/ns/activitystreams#Activity
    actor: Value | None = wire("actor")
    instrument: Value | None = wire("instrument")
    origin: Value | None = wire("origin")
    object: Value | None = wire("object")
    result: Value | None = wire("result")
    target: Value | None = wire("target")

    # https://www.w3.org/ns/activitystreams#Collection
    total_items: Count | None = wire("totalItems")
    # Range: CollectionPage | Link
    current: Value | None = wire("current")
    first: Value | None = wire("first")
    last: Value | None = wire("last")
    items: Value | None = wire("items")

    # https://www.w3.org/ns/activitystreams#OrderedCollection
    ordered_items: Value | None = wire("orderedItems")

    # https://www.w3.org/ns/activitystreams#CollectionPage
    next: Value | None = wire("next")
    prev: Value | None = wire("prev")
    # Range: Link | Collection
    part_of: Value | None = wire("partOf")

    # https://www.w3.org/ns/activitystreams#OrderedCollectionPage
    start_index: Count | None = wire("startIndex")

    # https://www.w3.org/ns/activitystreams#Relationship
    subject: Value | None = wire("subject")
    relationship: Value | None = wire("relationship")

    # https://www.w3.org/ns/activitystreams#Tombstone
    former_type: Value | None = wire("former_type")
    deleted: str | None = wire("deleted")

    # https://www.w3.org/ns/activitystreams#Question
    one_of: Value | None = wire("oneOf")
    any_of: Value | None = wire("anyOf")
    closed: Value | None = wire("closed")

    # https://www.w3.org/ns/activitystreams#Place
    accuracy: float | None = wire("accuracy")
    altitude: float | None = wire("altitude")
    latitute: float | None = wire("latitute")
    longitute: float | None = wire("longitute")
    radius: float | None = wire("radius")
    units: str | None = wire("units")

    # https://docs.joinmastodon.org/spec/activitypub/#as
    manually_approves_followers: bool | None = wire("manuallyApprovesFollowers")
    also_known_as: Value | None = wire("alsoKnownAs")
    moved_to: str | None = wire("movedTo")
    sensitive: bool | None = wire("sensitive")

    # http://joinmastodon.org/ns
    featured: str | None = wire("featured")
    featured_tags: str | None = wire("featuredTags")
    discoverable: bool | None = wire("discoverable")
    suspended: bool | None = wire("suspended")
    devices: str | None = wire("devices")

    # https://w3id.org/security/v1
    public_key: KeyShape | None = wire("publicKey")

    # https://schema.org/PropertyValue
    value: str | None = wire("value")
