from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "py" / "src"))

from handlerspec.selector import has_selector, select  # noqa: E402

MARKUP = """
<form action="/signup" method="post">
  <input name="email" type="email">
  <div class="field error"><span>required</span></div>
</form>
<a href="/terms" data-kind="legal">Terms</a>
"""


class TestSelector(unittest.TestCase):
    def test_has_selector_matches_css(self) -> None:
        self.assertTrue(has_selector(MARKUP, "form input[name=email]"))
        self.assertTrue(has_selector(MARKUP, "div.field.error > span"))
        self.assertTrue(has_selector(MARKUP, 'a[data-kind="legal"]'))
        self.assertFalse(has_selector(MARKUP, "div.warning"))
        self.assertFalse(has_selector("", "div"))

    def test_select_returns_matched_markup(self) -> None:
        self.assertEqual(select(MARKUP, "div.error span"), ["<span>required</span>"])
        self.assertEqual(select(MARKUP, "table"), [])
