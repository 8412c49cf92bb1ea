"""Per-entity conversion between the domain model and wire shapes.

Each supported entity has one converter. The set is closed: ``converter_for``
and ``converter_of`` are the only ways to reach them from outside.

Fields that may hold "an object, a link, or just its identifier" go through
``ObjectOrLinkConverter``:

* writing: an Object becomes an Object shape; a Link with nothing but an
  ``href`` becomes a bare URI string; any other Link becomes a Link shape.
* reading: a string becomes ``Link(href=...)``; an object is tried as a Link
  shape (it must carry a string ``href``) and, failing that, as an Object
  shape. An Object that carries ``href`` is therefore read as a Link.

The ``url`` property applies the same compaction but only ever holds a Link.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from aswire.adapters import (
    Converter,
    DateTimeConverter,
    ShapeConverter,
    StrConverter,
    ValueConverter,
)
from aswire.codecs import json_kind
from aswire.context import ContextConverter
from aswire.errors import ConversionError, ShapeError
from aswire.lax import decode_many, encode_many
from aswire.model import (
    ActorProperties,
    Context,
    Key,
    Link,
    Object,
    ObjectOrLink,
)
from aswire.shapes import KeyShape, LinkShape, ObjectShape
from aswire.types import Value

logger = logging.getLogger(__name__)

_ACTOR_GROUP = ("inbox", "outbox", "followers", "following")


def _at[T](wire_name: str, decode: Callable[[], T]) -> T:
    """Run decode, locating any failure under wire_name."""
    try:
        return decode()
    except ConversionError as err:
        raise err.at(wire_name) from None


def _opt_value[T](item: T | None, converter: Converter[T, Any]) -> Value | None:
    return None if item is None else converter.to_value(item)


def _opt_domain[T](
    value: Value | None,
    converter: Converter[T, Any],
    wire_name: str,
) -> T | None:
    if value is None:
        return None
    return _at(wire_name, lambda: converter.from_value(value))


def _many[T](
    value: Value | None,
    converter: Converter[T, Any],
    wire_name: str,
) -> tuple[T, ...]:
    return _at(wire_name, lambda: decode_many(value, converter))


def _map(items: Mapping[str, str]) -> dict[str, str] | None:
    return dict(items) if items else None


class KeyConverter(ShapeConverter[Key, KeyShape]):
    """Public keys (``publicKey``)."""

    shape = KeyShape

    def to_wire(self, domain: Key) -> KeyShape:
        """Flatten a key into its wire shape."""
        return KeyShape(
            id=domain.id,
            owner=domain.owner,
            public_key_pem=domain.public_key_pem,
        )

    def to_domain(self, wire: KeyShape) -> Key:
        """Build a key from its wire shape."""
        return Key(id=wire.id, owner=wire.owner, public_key_pem=wire.public_key_pem)


class LinkConverter(ShapeConverter[Link, LinkShape]):
    """Links, always in their full object form."""

    shape = LinkShape

    def to_wire(self, domain: Link) -> LinkShape:
        """Flatten a link into its full object shape."""
        return LinkShape(
            schema_context=_opt_value(domain.schema_context, _contexts),
            id=domain.id,
            type=encode_many(domain.type, _strings),
            href=domain.href,
            height=domain.height,
            hreflang=domain.hreflang,
            media_type=encode_many(domain.media_type, _strings),
            rel=encode_many(domain.rel, _strings),
            width=domain.width,
        )

    def to_domain(self, wire: LinkShape) -> Link:
        """Build a link from its wire shape."""
        return Link(
            schema_context=_opt_domain(wire.schema_context, _contexts, "@context"),
            id=wire.id,
            type=_many(wire.type, _strings, "type"),
            href=wire.href,
            height=wire.height,
            hreflang=wire.hreflang,
            media_type=_many(wire.media_type, _strings, "mediaType"),
            rel=_many(wire.rel, _strings, "rel"),
            width=wire.width,
        )


class UrlConverter(ValueConverter[Link]):
    """The ``url`` property: a Link, compacted to its href when bare."""

    def to_wire(self, domain: Link) -> Value:
        """Write the href alone when the link is bare."""
        if domain.is_bare():
            return domain.href
        return _links.to_value(domain)

    def to_domain(self, wire: Value) -> Link:
        """Read a URI string or a Link object."""
        if isinstance(wire, str):
            return Link(href=wire)
        return _links.from_value(wire)


class ObjectOrLinkConverter(ValueConverter[ObjectOrLink]):
    """Values that may be an Object, a Link or a bare URI."""

    def to_wire(self, domain: ObjectOrLink) -> Value:
        """Write an Object, or a Link compacted when bare."""
        if isinstance(domain, Object):
            return _objects.to_value(domain)
        if isinstance(domain, Link):
            return _urls.to_wire(domain)
        msg = f"Expected Object or Link, got {type(domain).__name__}"
        raise TypeError(msg)

    def to_domain(self, wire: Value) -> ObjectOrLink:
        """Read a URI string, then try Link before Object."""
        if isinstance(wire, str):
            return Link(href=wire)
        if not isinstance(wire, dict):
            msg = f"Expected URI string, Link or Object, got {json_kind(wire)}"
            raise ShapeError(msg)

        try:
            link_shape = _links.value_to_wire(wire)
        except ShapeError as link_err:
            logger.debug("Not a Link shape (%s), trying Object", link_err)
            try:
                object_shape = _objects.value_to_wire(wire)
            except ShapeError as object_err:
                msg = (
                    "Value matches neither Link nor Object "
                    f"(as Link: {link_err}; as Object: {object_err})"
                )
                raise ShapeError(msg) from None
            return _objects.to_domain(object_shape)
        return _links.to_domain(link_shape)


class ObjectConverter(ShapeConverter[Object, ObjectShape]):
    """Objects of every vocabulary layer."""

    shape = ObjectShape

    def to_wire(self, domain: Object) -> ObjectShape:
        """Flatten an object, spreading actor properties into the top level."""
        actor = domain.actor_properties
        return ObjectShape(
            schema_context=_opt_value(domain.schema_context, _contexts),
            id=domain.id,
            type=encode_many(domain.type, _strings),
            attachment=encode_many(domain.attachment, _object_or_link),
            attributed_to=encode_many(domain.attributed_to, _object_or_link),
            audience=encode_many(domain.audience, _object_or_link),
            bcc=encode_many(domain.bcc, _object_or_link),
            bto=encode_many(domain.bto, _object_or_link),
            cc=encode_many(domain.cc, _object_or_link),
            context=encode_many(domain.context, _object_or_link),
            generator=encode_many(domain.generator, _object_or_link),
            icon=encode_many(domain.icon, _object_or_link),
            image=encode_many(domain.image, _object_or_link),
            in_reply_to=encode_many(domain.in_reply_to, _object_or_link),
            location=encode_many(domain.location, _object_or_link),
            preview=encode_many(domain.preview, _object_or_link),
            replies=None if domain.replies is None else self.to_wire(domain.replies),
            tag=encode_many(domain.tag, _object_or_link),
            to=encode_many(domain.to, _object_or_link),
            url=_opt_value(domain.url, _urls),
            content=encode_many(domain.content, _strings),
            content_map=_map(domain.content_map),
            name=encode_many(domain.name, _strings),
            name_map=_map(domain.name_map),
            duration=domain.duration,
            media_type=encode_many(domain.media_type, _strings),
            end_time=_opt_value(domain.end_time, _datetimes),
            published=_opt_value(domain.published, _datetimes),
            summary=encode_many(domain.summary, _strings),
            summary_map=_map(domain.summary_map),
            updated=_opt_value(domain.updated, _datetimes),
            describes=(
                None if domain.describes is None else self.to_wire(domain.describes)
            ),
            inbox=actor.inbox if actor else None,
            outbox=actor.outbox if actor else None,
            following=actor.following if actor else None,
            followers=actor.followers if actor else None,
            preferred_username=actor.preferred_username if actor else None,
            endpoints=_map(actor.endpoints) if actor else None,
            actor=encode_many(domain.actor, _object_or_link),
            instrument=encode_many(domain.instrument, _object_or_link),
            origin=encode_many(domain.origin, _object_or_link),
            object=encode_many(domain.object, _object_or_link),
            result=encode_many(domain.result, _object_or_link),
            target=encode_many(domain.target, _object_or_link),
            total_items=domain.total_items,
            current=_opt_value(domain.current, _object_or_link),
            first=_opt_value(domain.first, _object_or_link),
            last=_opt_value(domain.last, _object_or_link),
            items=encode_many(domain.items, _object_or_link),
            ordered_items=encode_many(domain.ordered_items, _object_or_link),
            next=_opt_value(domain.next, _object_or_link),
            prev=_opt_value(domain.prev, _object_or_link),
            part_of=_opt_value(domain.part_of, _object_or_link),
            start_index=domain.start_index,
            subject=_opt_value(domain.subject, _object_or_link),
            relationship=encode_many(domain.relationship, _object_or_link),
            former_type=encode_many(domain.former_type, _strings),
            deleted=_opt_value(domain.deleted, _datetimes),
            one_of=encode_many(domain.one_of, _object_or_link),
            any_of=encode_many(domain.any_of, _object_or_link),
            closed=domain.closed,
            accuracy=domain.accuracy,
            altitude=domain.altitude,
            latitute=domain.latitute,
            longitute=domain.longitute,
            radius=domain.radius,
            units=domain.units,
            manually_approves_followers=domain.manually_approves_followers,
            also_known_as=encode_many(domain.also_known_as, _strings),
            moved_to=domain.moved_to,
            sensitive=domain.sensitive,
            featured=domain.featured,
            featured_tags=domain.featured_tags,
            discoverable=domain.discoverable,
            suspended=domain.suspended,
            devices=domain.devices,
            public_key=(
                None if domain.public_key is None else _keys.to_wire(domain.public_key)
            ),
            value=domain.value,
        )

    def to_domain(self, wire: ObjectShape) -> Object:
        """Build an object, gathering the actor group when complete."""
        ool = _object_or_link
        return Object(
            schema_context=_opt_domain(wire.schema_context, _contexts, "@context"),
            id=wire.id,
            type=_many(wire.type, _strings, "type"),
            attachment=_many(wire.attachment, ool, "attachment"),
            attributed_to=_many(wire.attributed_to, ool, "attributeTo"),
            audience=_many(wire.audience, ool, "audience"),
            bcc=_many(wire.bcc, ool, "bcc"),
            bto=_many(wire.bto, ool, "bto"),
            cc=_many(wire.cc, ool, "cc"),
            context=_many(wire.context, ool, "context"),
            generator=_many(wire.generator, ool, "generator"),
            icon=_many(wire.icon, ool, "icon"),
            image=_many(wire.image, ool, "image"),
            in_reply_to=_many(wire.in_reply_to, ool, "inReplyTo"),
            location=_many(wire.location, ool, "location"),
            preview=_many(wire.preview, ool, "preview"),
            replies=self._boxed(wire.replies, "replies"),
            tag=_many(wire.tag, ool, "tag"),
            to=_many(wire.to, ool, "to"),
            url=_opt_domain(wire.url, _urls, "url"),
            content=_many(wire.content, _strings, "content"),
            content_map=wire.content_map or {},
            name=_many(wire.name, _strings, "name"),
            name_map=wire.name_map or {},
            duration=wire.duration,
            media_type=_many(wire.media_type, _strings, "mediaType"),
            end_time=_opt_domain(wire.end_time, _datetimes, "endTime"),
            published=_opt_domain(wire.published, _datetimes, "published"),
            summary=_many(wire.summary, _strings, "summary"),
            summary_map=wire.summary_map or {},
            updated=_opt_domain(wire.updated, _datetimes, "updated"),
            describes=self._boxed(wire.describes, "describes"),
            actor_properties=self._actor_properties(wire),
            actor=_many(wire.actor, ool, "actor"),
            instrument=_many(wire.instrument, ool, "instrument"),
            origin=_many(wire.origin, ool, "origin"),
            object=_many(wire.object, ool, "object"),
            result=_many(wire.result, ool, "result"),
            target=_many(wire.target, ool, "target"),
            total_items=wire.total_items,
            current=_opt_domain(wire.current, ool, "current"),
            first=_opt_domain(wire.first, ool, "first"),
            last=_opt_domain(wire.last, ool, "last"),
            items=_many(wire.items, ool, "items"),
            ordered_items=_many(wire.ordered_items, ool, "orderedItems"),
            next=_opt_domain(wire.next, ool, "next"),
            prev=_opt_domain(wire.prev, ool, "prev"),
            part_of=_opt_domain(wire.part_of, ool, "partOf"),
            start_index=wire.start_index,
            subject=_opt_domain(wire.subject, ool, "subject"),
            relationship=_many(wire.relationship, ool, "relationship"),
            former_type=_many(wire.former_type, _strings, "former_type"),
            deleted=_opt_domain(wire.deleted, _datetimes, "deleted"),
            one_of=_many(wire.one_of, ool, "oneOf"),
            any_of=_many(wire.any_of, ool, "anyOf"),
            closed=wire.closed,
            accuracy=wire.accuracy,
            altitude=wire.altitude,
            latitute=wire.latitute,
            longitute=wire.longitute,
            radius=wire.radius,
            units=wire.units,
            manually_approves_followers=wire.manually_approves_followers,
            also_known_as=_many(wire.also_known_as, _strings, "alsoKnownAs"),
            moved_to=wire.moved_to,
            sensitive=wire.sensitive,
            featured=wire.featured,
            featured_tags=wire.featured_tags,
            discoverable=wire.discoverable,
            suspended=wire.suspended,
            devices=wire.devices,
            public_key=(
                None if wire.public_key is None else _keys.to_domain(wire.public_key)
            ),
            value=wire.value,
        )

    def _boxed(self, wire: ObjectShape | None, wire_name: str) -> Object | None:
        if wire is None:
            return None
        return _at(wire_name, lambda: self.to_domain(wire))

    def _actor_properties(self, wire: ObjectShape) -> ActorProperties | None:
        if (
            wire.inbox is None
            or wire.outbox is None
            or wire.followers is None
            or wire.following is None
        ):
            present = [name for name in _ACTOR_GROUP if getattr(wire, name) is not None]
            if present:
                logger.debug(
                    "Dropping incomplete actor properties on %s: only %s present",
                    wire.id,
                    ", ".join(present),
                )
            return None
        return ActorProperties(
            inbox=wire.inbox,
            outbox=wire.outbox,
            following=wire.following,
            followers=wire.followers,
            preferred_username=wire.preferred_username,
            endpoints=wire.endpoints or {},
        )


_strings = StrConverter()
_datetimes = DateTimeConverter()
_contexts = ContextConverter()
_keys = KeyConverter()
_links = LinkConverter()
_urls = UrlConverter()
_objects = ObjectConverter()
_object_or_link = ObjectOrLinkConverter()

_BY_TYPE: dict[Any, Converter[Any, Any]] = {
    Object: _objects,
    Link: _links,
    Key: _keys,
    Context: _contexts,
    ObjectOrLink: _object_or_link,
}


def converter_for(entity: Any) -> Converter[Any, Any]:
    """Get the converter for a top-level entity type.

    Args:
        entity: One of Object, Link, Key, Context or ObjectOrLink

    Raises:
        TypeError: If entity is not a supported top-level type

    """
    try:
        return _BY_TYPE[entity]
    except (KeyError, TypeError):
        supported = ", ".join(getattr(t, "__name__", str(t)) for t in _BY_TYPE)
        msg = f"Unsupported entity type {entity!r}; expected one of: {supported}"
        raise TypeError(msg) from None


def converter_of(obj: Any) -> Converter[Any, Any]:
    """Get the converter for a domain value, dispatching on its class.

    Raises:
        TypeError: If obj is not an Object, Link, Key or Context

    """
    for entity_type in (Object, Link, Key, Context):
        if isinstance(obj, entity_type):
            return _BY_TYPE[entity_type]
    msg = f"Cannot convert object of type {type(obj).__name__}"
    raise TypeError(msg)
