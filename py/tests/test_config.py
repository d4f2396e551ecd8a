from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "py" / "src"))

from handlerspec.config import DEFAULT_JSON_CONTENT_TYPES, HarnessConfig, _normalize_harness_config  # noqa: E402


class TestConfig(unittest.TestCase):
    def test_normalize_harness_config_sets_defaults(self) -> None:
        cfg = _normalize_harness_config(None)
        self.assertEqual(cfg.default_headers, {})
        self.assertEqual(cfg.json_content_types, DEFAULT_JSON_CONTENT_TYPES)

        cfg2 = _normalize_harness_config(HarnessConfig(json_content_types=("  ", "")))
        self.assertEqual(cfg2.json_content_types, ("application/json",))

    def test_normalize_harness_config_cleans_values(self) -> None:
        cfg = _normalize_harness_config(
            HarnessConfig(
                default_headers={"Accept": "text/html", "X-Many": ["1", 2]},
                json_content_types="application/vnd.api+json",  # type: ignore[arg-type]
            )
        )
        self.assertEqual(cfg.default_headers, {"accept": ["text/html"], "x-many": ["1", "2"]})
        self.assertEqual(cfg.json_content_types, ("application/vnd.api+json",))

        cfg2 = _normalize_harness_config(HarnessConfig(default_headers="nope"))  # type: ignore[arg-type]
        self.assertEqual(cfg2.default_headers, {})
