"""Tests for the JSON renderer."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from fork_tools.core.models.status import Report
from fork_tools.renderers import RENDERERS
from fork_tools.renderers.json import render_json
from fork_tools.services.aggregator import aggregate
from tests.factories import StatusRecordFactory


@pytest.mark.unit
class TestRenderJson:
    """Tests for render_json."""

    def test_document(self) -> None:
        records = [
            StatusRecordFactory(name="tool", path=Path("/work/tool"), behind=2),
            StatusRecordFactory(name="odd", dirty=None, ahead=None, behind=None, upstream_url=None),
        ]
        report = Report(
            records=records,
            summary=aggregate(records, total_scanned=5),
            generated_at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
            version="1.0.0",
        )

        payload = json.loads(render_json(report))

        assert payload["version"] == "1.0.0"
        assert payload["generated_at"] == "2024-05-01T09:30:00+00:00"
        assert payload["summary"] == {
            "total_scanned": 5,
            "forks": 2,
            "dirty": 0,
            "needs_update": 1,
            "has_upstream": 1,
        }
        tool, odd = payload["forks"]
        assert tool["name"] == "tool"
        assert tool["path"] == "/work/tool"
        assert tool["status"] == "clean"
        assert tool["behind"] == 2
        assert tool["reference"] == "upstream/main"
        assert odd["status"] == "unknown"
        assert odd["ahead"] is None
        assert odd["behind"] is None
        assert odd["upstream"] is None

    def test_registered(self) -> None:
        assert RENDERERS["json"] is render_json
