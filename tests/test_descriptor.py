"""Descriptor fetching and version field extraction."""

import io
from urllib.error import HTTPError, URLError

import pytest

from versionwatch.branding import AppBranding
from versionwatch.core import descriptor
from versionwatch.core.descriptor import fetch_descriptor, parse_version
from versionwatch.core.errors import NetworkError, ParseError

from conftest import pom


class TestParseXml:

    def test_namespaced_pom(self):
        assert parse_version(pom("2.3.1")) == "2.3.1"

    def test_first_occurrence_in_document_order(self):
        data = b"""<project>
            <parent><version>5.0</version></parent>
            <version>1.4</version>
        </project>"""
        assert parse_version(data) == "5.0"

    def test_surrounding_whitespace_is_stripped(self):
        assert parse_version(b"<p><version>\n  1.2\n</version></p>") == "1.2"

    def test_custom_field(self):
        data = b"<release><tag>3.1</tag><version>0.1</version></release>"
        assert parse_version(data, field="tag") == "3.1"

    def test_missing_version(self):
        with pytest.raises(ParseError):
            parse_version(b"<project><name>demo</name></project>")

    def test_empty_version(self):
        with pytest.raises(ParseError):
            parse_version(b"<project><version/></project>")

    def test_malformed_xml(self):
        with pytest.raises(ParseError):
            parse_version(b"<project><version>1.0</project>")


class TestParseJson:

    def test_top_level_field(self):
        assert parse_version(b'{"name": "demo", "version": "1.5.2"}') == "1.5.2"

    def test_nested_field_before_later_top_level(self):
        data = b'{"info": {"version": "2.0"}, "version": "1.0"}'
        assert parse_version(data) == "2.0"

    def test_list_document(self):
        assert parse_version(b'  [{"tag": "x"}, {"version": "4.1"}]') == "4.1"

    def test_non_string_container_is_skipped(self):
        data = b'{"version": {"major": 1}, "meta": {"version": "1.3"}}'
        assert parse_version(data) == "1.3"

    def test_numeric_version(self):
        assert parse_version(b'{"version": 3}') == "3"

    def test_numeric_version_keeps_source_digits(self):
        assert parse_version(b'{"version": 1.10}') == "1.10"
        assert parse_version(b'{"version": 2.0}') == "2.0"

    def test_boolean_is_not_a_version(self):
        data = b'{"version": true, "meta": {"version": "1.3"}}'
        assert parse_version(data) == "1.3"

    def test_missing_field(self):
        with pytest.raises(ParseError):
            parse_version(b'{"name": "demo"}')

    def test_malformed_json(self):
        with pytest.raises(ParseError):
            parse_version(b'{"version": ')


class FakeResponse(io.BytesIO):

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class TestFetch:

    def test_returns_body_and_sends_user_agent(self, monkeypatch):
        seen = {}

        def fake_urlopen(req, timeout):
            seen['req'] = req
            seen['timeout'] = timeout
            return FakeResponse(b"<version>1.0</version>")

        monkeypatch.setattr(descriptor, 'urlopen', fake_urlopen)

        assert fetch_descriptor("https://example.com/pom.xml", timeout=7) == b"<version>1.0</version>"
        assert seen['req'].full_url == "https://example.com/pom.xml"
        assert seen['req'].get_header('User-agent') == AppBranding.user_agent()
        assert seen['timeout'] == 7

    @pytest.mark.parametrize("error", [
        URLError("name resolution failed"),
        HTTPError("https://example.com/pom.xml", 404, "Not Found", {}, None),
        TimeoutError("timed out"),
        ConnectionResetError("reset"),
    ])
    def test_failures_become_network_error(self, monkeypatch, error):
        def fake_urlopen(req, timeout):
            raise error

        monkeypatch.setattr(descriptor, 'urlopen', fake_urlopen)

        with pytest.raises(NetworkError):
            fetch_descriptor("https://example.com/pom.xml")
