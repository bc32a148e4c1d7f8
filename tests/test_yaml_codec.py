"""
tests.test_yaml_codec
~~~~~~~~~~~~~~~~~~~~~
Unit tests for the YAML wire format.
"""
from __future__ import annotations

import io

import pytest
import yaml
from rest_framework.exceptions import ParseError

from common.exceptions import ValidationError
from common.yaml_codec import (
    YAMLDocumentStream,
    YAMLParser,
    YAMLRenderer,
    dump,
    enumerate_documents,
)


class TestDocumentStream:

    def test_multiple_documents(self):
        stream = YAMLDocumentStream("name: a\n---\nname: b\n")
        assert list(stream) == [{"name": "a"}, {"name": "b"}]

    def test_empty_documents_skipped(self):
        stream = YAMLDocumentStream("---\n---\nname: a\n---\n")
        assert list(stream) == [{"name": "a"}]

    def test_duplicate_keys_rejected(self):
        stream = YAMLDocumentStream("name: a\nname: b\n")
        with pytest.raises(yaml.YAMLError, match="duplicate key"):
            list(stream)

    def test_nested_duplicate_keys_rejected(self):
        stream = YAMLDocumentStream("name: a\nvalue:\n  k: 1\n  k: 2\n")
        with pytest.raises(yaml.YAMLError, match="duplicate key"):
            list(stream)

    def test_timestamps_stay_strings(self):
        (document,) = YAMLDocumentStream("created: 2021-03-04T05:06:07Z\nday: 2021-03-04\n")
        assert document == {"created": "2021-03-04T05:06:07Z", "day": "2021-03-04"}

    def test_python_tags_refused(self):
        stream = YAMLDocumentStream("!!python/object/apply:os.system ['true']\n")
        with pytest.raises(yaml.YAMLError):
            list(stream)


class TestEnumerateDocuments:

    def test_indexes(self):
        pairs = list(enumerate_documents(YAMLDocumentStream("a: 1\n---\nb: 2\n"), "credential"))
        assert pairs == [(0, {"a": 1}), (1, {"b": 2})]

    def test_error_carries_index_of_failing_document(self):
        stream = YAMLDocumentStream("a: 1\n---\nb: 2\n---\nc: 3\nc: 4\n")
        seen = []
        with pytest.raises(ValidationError, match="Decoding exporter input at index=2 failed"):
            for index, _ in enumerate_documents(stream, "exporter"):
                seen.append(index)
        assert seen == [0, 1]

    def test_plain_iterables_accepted(self):
        assert list(enumerate_documents([{"a": 1}], "credential")) == [(0, {"a": 1})]


class TestParserAndRenderer:

    def test_parser_returns_lazy_stream(self):
        parsed = YAMLParser().parse(io.BytesIO(b"name: a\n"), parser_context={"encoding": "utf-8"})
        assert isinstance(parsed, YAMLDocumentStream)
        assert list(parsed) == [{"name": "a"}]

    def test_parser_rejects_undecodable_bytes(self):
        with pytest.raises(ParseError):
            YAMLParser().parse(io.BytesIO(b"\xff\xfe\xfa"), parser_context={"encoding": "utf-8"})

    def test_renderer_block_style_keeps_order(self):
        rendered = YAMLRenderer().render({"name": "a", "config": {"z": 1, "a": 2}})
        assert rendered == b"name: a\nconfig:\n  z: 1\n  a: 2\n"

    def test_renderer_empty_for_none(self):
        assert YAMLRenderer().render(None) == b""

    def test_dump_empty_list(self):
        assert yaml.safe_load(dump([])) == []
