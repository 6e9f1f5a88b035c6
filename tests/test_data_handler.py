"""
Tests for dataset loading, report output files and the webhook post.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from seller_analytics import data_handler, settings
from seller_analytics.analysis import analyze
from seller_analytics.exceptions import InvalidInputError


@pytest.fixture
def report(sample_data, default_options):
    return analyze(sample_data, default_options)


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    out = tmp_path / "output"
    monkeypatch.setattr(settings, "OUTPUT_DIR", out)
    monkeypatch.setattr(data_handler.utils, "get_date_suffix_for_filename", lambda: "2025-01-31")
    return out


def test_load_dataset(dataset_file, sample_data):
    assert data_handler.load_dataset(dataset_file) == sample_data


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(InvalidInputError):
        data_handler.load_dataset(tmp_path / "nope.json")


def test_load_dataset_rejects_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(InvalidInputError):
        data_handler.load_dataset(path)


def test_report_to_frame(report):
    df = data_handler.report_to_frame(report)

    assert list(df.columns) == ["seller_id", "name", "revenue", "profit", "sales_count", "bonus"]
    assert df["seller_id"].tolist() == ["seller_1", "seller_2", "seller_3"]
    assert df["profit"].tolist() == [22.0, 14.0, 0.0]


def test_top_products_to_frame(report):
    df = data_handler.top_products_to_frame(report)

    assert list(df.columns) == ["seller_id", "rank", "sku", "quantity"]
    seller_1 = df[df["seller_id"] == "seller_1"]
    assert seller_1["rank"].tolist() == [1, 2, 3]
    assert seller_1["sku"].tolist() == ["SKU_001", "SKU_003", "SKU_002"]
    # seller_3 sold nothing and gets no rows
    assert "seller_3" not in df["seller_id"].tolist()


def test_top_products_to_frame_empty_report():
    df = data_handler.top_products_to_frame([])

    assert df.empty
    assert list(df.columns) == ["seller_id", "rank", "sku", "quantity"]


def test_save_outputs_writes_csv_and_json(report, output_dir, monkeypatch):
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)

    written = data_handler.save_outputs(report, "seller_report")

    assert [p.name for p in written] == [
        "seller_report_2025-01-31.csv",
        "seller_report_top_products_2025-01-31.csv",
        "seller_report_2025-01-31.json",
    ]
    assert all(p.exists() for p in written)

    saved = json.loads((output_dir / "seller_report_2025-01-31.json").read_text(encoding="utf-8"))
    assert saved[0]["seller_id"] == "seller_1"
    assert saved[0]["top_products"][0] == {"sku": "SKU_001", "quantity": 2}

    header = (output_dir / "seller_report_2025-01-31.csv").read_text(encoding="utf-8").splitlines()[0]
    assert header == "seller_id,name,revenue,profit,sales_count,bonus"


def test_save_outputs_skips_json_when_disabled(report, output_dir, monkeypatch):
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)

    written = data_handler.save_outputs(report, "seller_report")

    assert len(written) == 2
    assert not (output_dir / "seller_report_2025-01-31.json").exists()


def test_post_to_webhook_skipped_without_url(report, monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)

    with patch.object(data_handler.requests, "post") as mock_post:
        assert data_handler.post_to_webhook(report) is False
    mock_post.assert_not_called()


def test_post_to_webhook_sends_payload(report, monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.com/report")
    response = MagicMock()

    with patch.object(data_handler.requests, "post", return_value=response) as mock_post:
        ok = data_handler.post_to_webhook(report, metadata={"source": "sales_dataset_2025-01-31.json"})

    assert ok is True
    response.raise_for_status.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args == ("https://hooks.example.com/report",)
    assert kwargs["timeout"] == settings.WEBHOOK_TIMEOUT
    payload = kwargs["json"]
    assert payload["metadata"] == {"source": "sales_dataset_2025-01-31.json"}
    assert [row["seller_id"] for row in payload["reportData"]] == ["seller_1", "seller_2", "seller_3"]


def test_post_to_webhook_logs_http_errors(report, monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.com/report")
    response = MagicMock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error")

    with patch.object(data_handler.requests, "post", return_value=response):
        assert data_handler.post_to_webhook(report) is False
