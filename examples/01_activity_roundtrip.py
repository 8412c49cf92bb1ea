"""
Activity Round Trip Example
===========================

Reading and writing ActivityStreams documents, demonstrating:
- Building domain objects with keyword arguments
- Lax arrays (one item written bare, several as an array)
- Bare links compacted to their href
- Actor properties that appear only as a complete group
"""

import logging
from datetime import UTC, datetime

from aswire import (
    ActorProperties,
    ConversionError,
    DirectIri,
    Link,
    Object,
    SingleContext,
    from_json,
    to_json,
)

PUBLIC = "https://www.w3.org/ns/activitystreams#Public"
AS_CONTEXT = SingleContext(
    iri=DirectIri(value="https://www.w3.org/ns/activitystreams"),
)


# ============================================================================
# Build documents
# ============================================================================

def build_actor() -> Object:
    """An actor with its inbox, outbox and collections."""
    base = "https://example.com/users/alice"
    return Object(
        schema_context=AS_CONTEXT,
        id=base,
        type=("Person",),
        name=("Alice",),
        actor_properties=ActorProperties(
            inbox=f"{base}/inbox",
            outbox=f"{base}/outbox",
            following=f"{base}/following",
            followers=f"{base}/followers",
            preferred_username="alice",
        ),
    )


def build_create(actor: Object) -> Object:
    """A Create activity wrapping a Note addressed to the public."""
    note = Object(
        id="https://example.com/notes/1",
        type=("Note",),
        attributed_to=(Link(href=actor.id),),
        to=(Link(href=PUBLIC),),
        content=("Hello, fediverse",),
        published=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
    )
    return Object(
        schema_context=AS_CONTEXT,
        type=("Create",),
        actor=(Link(href=actor.id),),
        object=(note,),
        to=(Link(href=PUBLIC), Link(href=f"{actor.id}/followers")),
    )


# ============================================================================
# Example: round trips
# ============================================================================

def main() -> None:
    """Write, read and re-write a few documents."""
    logging.basicConfig(level=logging.DEBUG)

    actor = build_actor()
    print("Actor as JSON:")
    print(to_json(actor, pretty=True))
    print()

    create = build_create(actor)
    text = to_json(create)
    print("Create as compact JSON:")
    print(text)
    print()

    # Reading back yields an equal value
    assert from_json(text, Object) == create

    # An authored one-element array settles to the bare form
    authored = '{"type":["Note"],"to":["https://example.com/a"]}'
    print(f"Authored: {authored}")
    print(f"Written:  {to_json(from_json(authored, Object))}")
    print()

    # An incomplete actor group is dropped; see the debug log
    partial = from_json('{"type":"Person","inbox":"https://a/inbox"}', Object)
    print(f"Partial actor is_actor: {partial.is_actor}")

    # Errors carry the path to the failing value
    try:
        from_json('{"object":{"published":"yesterday"}}', Object)
    except ConversionError as err:
        print(f"Error: {err}")


if __name__ == "__main__":
    main()
