"""Shared fixtures."""

from pathlib import Path
from typing import Optional

import pytest
import yaml

from bulksum.config import Config
from bulksum.summarization import MockSummaryProvider

from .helpers import base_config_data


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a config file and return a Config rooted in tmp_path."""

    def _write(data: Optional[dict] = None, name: str = "bulk-summarize.yaml") -> Config:
        data = data if data is not None else base_config_data()
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return Config(config_path=path, output_dir=tmp_path / "summaries")

    return _write


@pytest.fixture
def config(write_config) -> Config:
    return write_config()


@pytest.fixture
def provider() -> MockSummaryProvider:
    return MockSummaryProvider()
