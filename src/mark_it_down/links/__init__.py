"""Link and image target resolution."""

from .resolver import (
    IMAGE_EXTENSIONS,
    LinkKind,
    LinkResolver,
    ResolvedLink,
    classify_link,
    resolve_target,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "LinkKind",
    "LinkResolver",
    "ResolvedLink",
    "classify_link",
    "resolve_target",
]
