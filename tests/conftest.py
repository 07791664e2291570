import logging
import os
import sys
from pathlib import Path

import pytest


# Ensure the project root (repo folder) is importable when running pytest under uv.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _clear_import_cache(prefix: str) -> None:
    for name in list(sys.modules.keys()):
        if name == prefix or name.startswith(prefix + "."):
            del sys.modules[name]


def _clear_module(name: str) -> None:
    if name in sys.modules:
        del sys.modules[name]


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    """Create a Flask app configured to use a temp folder for logs.

    The application is defined as a global in gs1_link_web/__init__.py and reads
    configuration from environment variables at import time.
    """

    data_dir = tmp_path_factory.mktemp("gs1_link_web_data")

    os.environ["APP_MODE"] = "config.DevConfig"
    os.environ["SECRET_KEY"] = "test-secret-key"
    os.environ["GS1_LINK_DEFAULT_DOMAIN"] = "https://example.com"
    os.environ["QR_ERROR_CORRECTION"] = "M"

    # Force temp persistence so tests never touch the developer's real log.
    os.environ["GS1_LINK_FOLDER"] = str(data_dir)
    os.environ["GS1_LINK_LOG_FILE"] = str(Path(data_dir) / "test.log")

    _clear_import_cache("gs1_link_web")
    # APP_MODE points at the top-level module "config", so ensure it reloads with our env.
    _clear_module("config")
    _clear_module("app")

    import gs1_link_web  # noqa: E402

    # pytest already put handlers on the root logger, which turns the app's
    # basicConfig into a no-op; route records to the temp log file instead.
    logging.basicConfig(
        filename=os.environ["GS1_LINK_LOG_FILE"],
        level=logging.INFO,
        format="%(asctime)s %(levelname)s : %(message)s",
        force=True,
    )

    return gs1_link_web.app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(scope="session")
def encoder(app):
    """The encoder module; importing it needs the configured app package."""
    from gs1_link_web.link_builder import encoder as module  # noqa: E402

    return module


@pytest.fixture()
def log_text(app):
    """Read the application log written so far."""

    def read() -> str:
        for handler in logging.getLogger().handlers:
            handler.flush()
        return Path(app.config["GS1_LINK_LOG_FILE"]).read_text(encoding="utf-8")

    return read
