"""
common.yaml_codec
~~~~~~~~~~~~~~~~~
YAML wire format for the API: a strict safe loader, a DRF parser that
exposes the request body as a lazily decoded document stream, and a DRF
renderer.

Strictness means duplicate mapping keys are rejected and timestamps stay
plain strings, so every decoded document can be converted to JSON.
"""
from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from typing import Any

import yaml
from django.conf import settings
from rest_framework.exceptions import ParseError
from rest_framework.parsers import BaseParser
from rest_framework.renderers import BaseRenderer

from common.exceptions import ValidationError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class StrictSafeLoader(yaml.SafeLoader):
    """``SafeLoader`` that refuses duplicate keys and does not build dates."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    continue
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


StrictSafeLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _ResponseDumper(yaml.SafeDumper):
    """Safe dumper that also accepts DRF's ``ReturnDict``/``ReturnList``."""


_ResponseDumper.add_multi_representer(dict, yaml.representer.SafeRepresenter.represent_dict)
_ResponseDumper.add_multi_representer(list, yaml.representer.SafeRepresenter.represent_list)
_ResponseDumper.add_multi_representer(str, yaml.representer.SafeRepresenter.represent_str)


class YAMLDocumentStream:
    """
    The documents of a YAML stream, decoded one at a time on iteration.

    Empty documents (``---`` with nothing after it) are skipped.  Decoding
    errors surface from the iterator at the position of the offending
    document, see :func:`enumerate_documents`.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[Any]:
        for document in yaml.load_all(self.text, Loader=StrictSafeLoader):
            if document is not None:
                yield document

    def __repr__(self) -> str:
        return f"<YAMLDocumentStream {len(self.text)} chars>"


def enumerate_documents(documents: Iterable[Any], kind: str) -> Iterator[tuple[int, Any]]:
    """
    Yield ``(index, document)`` pairs, turning YAML syntax errors into a
    :class:`~common.exceptions.ValidationError` that names the zero-based
    index of the document that failed to decode.
    """
    iterator = iter(documents)
    index = 0
    while True:
        try:
            document = next(iterator)
        except StopIteration:
            return
        except yaml.YAMLError as exc:
            raise ValidationError(
                f"Decoding {kind} input at index={index} failed: {exc}"
            ) from exc
        yield index, document
        index += 1


def dump(data: Any) -> str:
    """Serialize *data* as a single block-style YAML document."""
    return yaml.dump(
        data,
        Dumper=_ResponseDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


# ---------------------------------------------------------------------------
# DRF integration
# ---------------------------------------------------------------------------

class YAMLParser(BaseParser):
    """Parses a YAML stream body into a :class:`YAMLDocumentStream`."""

    media_type = "application/yaml"

    def parse(self, stream, media_type=None, parser_context=None) -> YAMLDocumentStream:
        parser_context = parser_context or {}
        encoding = parser_context.get("encoding", settings.DEFAULT_CHARSET)
        try:
            text = stream.read().decode(encoding)
        except UnicodeDecodeError as exc:
            raise ParseError(f"YAML parse error - {exc}") from exc
        return YAMLDocumentStream(text)


class RawYAMLParser(YAMLParser):
    """Treats a body of any other content type as YAML (``curl --data-binary``)."""

    media_type = "*/*"


class YAMLRenderer(BaseRenderer):
    media_type = "application/yaml"
    format = "yaml"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None) -> bytes:
        if data is None:
            return b""
        return dump(data).encode(self.charset)
