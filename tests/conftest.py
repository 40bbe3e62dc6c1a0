"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample weather days
- Encoded test images
- Fake inference sessions
- FastAPI test client
"""
import io
import os
import struct
import zlib

# Keep retries instant and skip the real model during tests
os.environ.setdefault("RETRY_MIN_WAIT", "0")
os.environ.setdefault("RETRY_MAX_WAIT", "0")
os.environ.setdefault("MODEL_PRELOAD_ON_STARTUP", "false")

import numpy as np
import pytest
from types import SimpleNamespace
from PIL import Image
from fastapi.testclient import TestClient

from ricecare.main import app
from ricecare.domain.models import WeatherDay


# ============================================================
# Sample Data Fixtures
# ============================================================

def make_day(**overrides) -> WeatherDay:
    """Build a WeatherDay, defaulting to a day that fully matches Rice Blast."""
    values = dict(
        date="2026-07-01",
        temp_min=23.0,
        temp_max=28.0,
        rh_avg=90.0,
        rain_sum=3.0,
        dewpoint_avg=21.0,
        leaf_wetness_hours=9,
    )
    values.update(overrides)
    return WeatherDay(**values)


@pytest.fixture
def blast_day() -> WeatherDay:
    """A warm, humid, wet day matching every Rice Blast condition."""
    return make_day()


@pytest.fixture
def dry_day() -> WeatherDay:
    """A hot, dry day matching almost nothing."""
    return make_day(
        date="2026-07-02",
        temp_min=30.0,
        temp_max=38.0,
        rh_avg=40.0,
        rain_sum=0.0,
        dewpoint_avg=12.0,
        leaf_wetness_hours=0,
    )


def encode_image(color, size=(224, 224), mode="RGB", image_format="PNG") -> bytes:
    """Encode a uniform image of the given colour."""
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=image_format)
    return buf.getvalue()


def png_header(width: int, height: int) -> bytes:
    """A PNG that declares the given size but carries no pixel data."""
    def chunk(kind: bytes, data: bytes) -> bytes:
        body = kind + data
        return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body))
    
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")


@pytest.fixture
def leaf_png() -> bytes:
    """A uniform 224x224 PNG leaf stand-in."""
    return encode_image((120, 180, 200))


# ============================================================
# Fake Inference Session
# ============================================================

class FakeSession:
    """Minimal stand-in for onnxruntime.InferenceSession."""
    
    def __init__(self, scores=None, error=None, input_name="input.1", output_name="logits"):
        self.scores = scores if scores is not None else [0.1, 0.2, 3.5, 0.4, 0.0, 0.0, 0.1]
        self.error = error
        self.input_name = input_name
        self.output_name = output_name
        self.calls = []
    
    def get_inputs(self):
        return [SimpleNamespace(name=self.input_name, shape=[1, 3, 224, 224])]
    
    def get_outputs(self):
        return [SimpleNamespace(name=self.output_name), SimpleNamespace(name="aux")]
    
    def run(self, output_names, feeds):
        self.calls.append((output_names, feeds))
        if self.error is not None:
            raise self.error
        return [np.array([self.scores], dtype=np.float32)]


class CountingFactory:
    """Session factory that records how often the graph is initialized."""
    
    def __init__(self, session=None, failures=0):
        self.session = session or FakeSession()
        self.failures = failures
        self.calls = 0
    
    def __call__(self, model_path):
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError(f"cannot parse graph at {model_path}")
        return self.session


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def counting_factory(fake_session) -> CountingFactory:
    return CountingFactory(session=fake_session)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
