"""
Pytest configuration and fixtures for the PDFMagic compression API.
"""

import os
import shutil
import subprocess
import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

# Point the staging area at an isolated directory before importing the app
os.environ["TEMP_DIR"] = tempfile.mkdtemp(prefix="pdfmagic_test_tmp_")

from app.core.logging import configure_logging
from app.main import app

OUTPUT_PREFIX = "-sOutputFile="


class FakeGhostscript:
    """Stand-in for the Ghostscript subprocess that copies input to output."""

    def __init__(self):
        self.calls = []
        self.mode = "copy"
        self.payload = None

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        output_path = Path(next(arg for arg in command if arg.startswith(OUTPUT_PREFIX))[len(OUTPUT_PREFIX):])
        input_path = Path(command[-1])

        if self.mode == "fail":
            raise subprocess.CalledProcessError(
                1, command, output=b"", stderr=f"Error: /undefined in {input_path}".encode()
            )
        if self.mode == "timeout":
            raise subprocess.TimeoutExpired(command, kwargs.get("timeout"))
        if self.mode == "missing_binary":
            raise FileNotFoundError(command[0])
        if self.mode != "no_output":
            data = self.payload if self.payload is not None else input_path.read_bytes()
            output_path.write_bytes(data)

        return subprocess.CompletedProcess(command, 0, b"", b"")

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture(scope="session")
def temp_dir():
    """Staging directory used by the app; removed after the session."""
    path = Path(os.environ["TEMP_DIR"])
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def ghostscript(monkeypatch):
    """Replace the Ghostscript subprocess call with a recording fake."""
    fake = FakeGhostscript()
    monkeypatch.setattr("app.services.compression_service.subprocess.run", fake)
    return fake


@pytest.fixture
def app_log(caplog):
    """Capture records from the application logger, which does not propagate."""
    logger = configure_logging()
    logger.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)


def build_pdf(title="Quarterly Report", author="Jane Doe", **extra):
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    metadata = {
        "/Title": title,
        "/Author": author,
        "/Subject": "Finance",
        "/Keywords": "q3, revenue",
        "/Producer": "Report Generator 2.1",
        "/Creator": "Office Suite",
    }
    metadata.update(extra)
    writer.add_metadata(metadata)

    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_pdf():
    """A small valid PDF with populated document information."""
    return build_pdf()


@pytest.fixture
def make_pdf():
    """Factory for PDFs with custom document information."""
    return build_pdf
