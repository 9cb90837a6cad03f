import threading
import time

import pytest

from versionwatch.core.models import EngineConfig

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.example</groupId>
  <artifactId>demo</artifactId>
  <version>{version}</version>
  <dependencies>
    <dependency>
      <groupId>org.example</groupId>
      <artifactId>lib</artifactId>
      <version>9.9.9</version>
    </dependency>
  </dependencies>
</project>
"""


def pom(version: str) -> bytes:
    return POM_TEMPLATE.format(version=version).encode('utf-8')


def wait_done(engine, timeout: float = 5.0):
    deadline = time.monotonic() + timeout
    while not engine.is_done:
        assert time.monotonic() < deadline, "update check did not finish"
        time.sleep(0.01)


class GatedFetcher:
    """Fetcher that blocks until released, then returns or raises."""

    def __init__(self, data: bytes = b"", error: Exception | None = None):
        self.data = data
        self.error = error
        self.release = threading.Event()
        self.calls = []

    def __call__(self, url, timeout):
        self.calls.append((url, timeout))
        self.release.wait(5)
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def make_config():
    def _make(local_version="1.1", **overrides):
        values = dict(
            descriptor_url="https://example.com/pom.xml",
            local_version=local_version,
            download_url="https://example.com/download",
            app_name="Demo",
            notification_permission="demo.notify",
            message_header="[Demo] ",
        )
        values.update(overrides)
        return EngineConfig(**values)
    return _make
