"""Fixtures for unit tests."""

from pathlib import Path
from typing import Generator

import pytest
import structlog

from sonar_scan_manager.configuration.models import AnalysisConfig, SonarAuthenticationType


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def analysis_config() -> AnalysisConfig:
    """An analysis configuration using basic authentication against a local server."""
    return AnalysisConfig(
        sonar_authentication_type=SonarAuthenticationType.BASIC,
        sonar_user="admin",
        sonar_password="admin",
        health_poll_interval=0.0,
    )


@pytest.fixture
def go_source_tree(tmp_path: Path) -> Path:
    """A small Go source tree with two functions in main.go and one in pkg/util.go."""
    (tmp_path / "pkg").mkdir()
    (tmp_path / "main.go").write_text(
        "package main\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "func Foo(x int) {\n"
        "\tfmt.Println(x)\n"
        "\n"
        "\tfmt.Println(x + 1)\n"
        "}\n"
        "\n"
        "\n"
        "func Bar() {\n"
        "\tFoo(1)\n"
        "\n"
        "\tFoo(2)\n"
        "}\n"
    )
    (tmp_path / "pkg" / "util.go").write_text(
        "package pkg\n"
        "\n"
        "type Server struct{}\n"
        "\n"
        "func (s *Server) Start() error {\n"
        "\treturn nil\n"
        "}\n"
    )
    return tmp_path
