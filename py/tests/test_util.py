from __future__ import annotations

import sys
import unittest
import urllib.parse
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "py" / "src"))

from handlerspec.util import (  # noqa: E402
    canonicalize_headers,
    clone_query,
    first_header_value,
    form_url_encode,
    normalize_path,
    to_bytes,
)


class TestUtil(unittest.TestCase):
    def test_normalize_path_handles_empty_query_and_missing_slash(self) -> None:
        self.assertEqual(normalize_path(""), "/")
        self.assertEqual(normalize_path(" /x?y=1 "), "/x")
        self.assertEqual(normalize_path("x"), "/x")

    def test_canonicalize_headers_lowercases_and_collects_values(self) -> None:
        out = canonicalize_headers({"": "skip", "X-One": "1", "X-Two": ["2", 3]})
        self.assertNotIn("", out)
        self.assertEqual(out["x-one"], ["1"])
        self.assertEqual(out["x-two"], ["2", "3"])

        pairs = canonicalize_headers([("Set-Cookie", "a=1"), ("set-cookie", "b=2")])
        self.assertEqual(pairs, {"set-cookie": ["a=1", "b=2"]})

    def test_first_header_value_is_case_insensitive(self) -> None:
        headers = canonicalize_headers({"Location": "/next"})
        self.assertEqual(first_header_value(headers, "LOCATION"), "/next")
        self.assertIsNone(first_header_value(headers, "content-type"))

    def test_clone_query_accepts_mappings_and_pairs(self) -> None:
        self.assertEqual(clone_query({"a": "1", "b": ["2", 3]}), {"a": ["1"], "b": ["2", "3"]})
        self.assertEqual(clone_query([("a", "1"), ("a", "2")]), {"a": ["1", "2"]})
        self.assertEqual(clone_query(None), {})

    def test_to_bytes_supports_common_types_and_errors_for_other_values(self) -> None:
        self.assertEqual(to_bytes(None), b"")
        self.assertEqual(to_bytes("é"), "é".encode("utf-8"))
        self.assertEqual(to_bytes(bytearray(b"x")), b"x")
        self.assertEqual(to_bytes(memoryview(b"y")), b"y")
        with self.assertRaisesRegex(TypeError, "bytes-like or str"):
            to_bytes(123)

    def test_form_url_encode_escapes_reserved_characters(self) -> None:
        body = form_url_encode({"a": "1 2", "b": "x&y"})
        self.assertEqual(body, b"a=1+2&b=x%26y")
        decoded = urllib.parse.parse_qsl(body.decode("ascii"), keep_blank_values=True)
        self.assertEqual(decoded, [("a", "1 2"), ("b", "x&y")])

    def test_form_url_encode_keeps_only_the_unreserved_alphabet(self) -> None:
        self.assertEqual(form_url_encode({"k": "aZ09-_.*"}), b"k=aZ09-_.*")
        self.assertEqual(form_url_encode({"k": "~/=+"}), b"k=%7E%2F%3D%2B")
        self.assertEqual(form_url_encode({"name": "é"}), b"name=%C3%A9")

    def test_form_url_encode_normalizes_bare_newlines(self) -> None:
        self.assertEqual(form_url_encode({"t": "a\nb"}), b"t=a%0D%0Ab")
        self.assertEqual(form_url_encode({"t": "a\r\nb"}), b"t=a%0D%0Ab")

    def test_form_url_encode_repeats_keys_for_lists_and_handles_empty(self) -> None:
        self.assertEqual(form_url_encode({"k": ["1", "2"], "e": ""}), b"k=1&k=2&e=")
        self.assertEqual(form_url_encode({}), b"")
        self.assertEqual(form_url_encode([("x", 1), ("y", 2)]), b"x=1&y=2")
