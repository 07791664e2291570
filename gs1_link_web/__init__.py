# /__init__.py

# Python Imports
import os
from datetime import datetime
import logging
import toml

# Third party imports
from flask import Flask, request
from pathlib import Path
from dotenv import load_dotenv

# Local imports

# Define the WSGI application object
app = Flask(__name__)

##################################
### Load Flask Run Mode
### Configuration based
### on environment
### (Production, Development)
##################################
load_dotenv("./.env", verbose=True)
app.config.from_object(os.environ["APP_MODE"])


##################################
### Logging Setup
##################################
os.makedirs(app.config["GS1_LINK_FOLDER"], exist_ok=True)
logging.basicConfig(
    filename=app.config["GS1_LINK_LOG_FILE"],
    level=logging.INFO,
    format="%(asctime)s %(levelname)s : %(message)s",
)

def log_message(message):
    """Helper function to prefix Log message with source IP address"""
    source_ip = (
        request.headers.get("X-Forwarded-For", request.remote_addr or "")
        .split(",")[0]
        .strip()
    )
    return f"[IP: {source_ip}] {message}"


app.logger.info(f"GS1 Link Web default domain: {app.config['GS1_LINK_DEFAULT_DOMAIN']}")


##################################
### Routing Blueprint Setup
##################################
from gs1_link_web.error_pages.handlers import error_pages
from gs1_link_web.link_builder.views import link_builder


app.register_blueprint(error_pages)
app.register_blueprint(link_builder)



##################################
### Context Processor
### Global template variables
##################################
_PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def get_version():
    """Get the version of the application."""
    try:
        with open(_PYPROJECT, "r") as f:
            pyproject_data = toml.load(f)
    except OSError:
        return "unknown"
    return pyproject_data["project"]["version"]


@app.context_processor
def inject_globals():
    """Inject global variables into all templates."""

    def get_asset_rev() -> int:
        static_dir = Path(__file__).resolve().parent / "static"
        candidates = [
            static_dir / "app.js",
            static_dir / "styles.css",
            static_dir / "service-worker.js",
            static_dir / "manifest.webmanifest",
        ]
        mtimes: list[int] = []
        for p in candidates:
            try:
                mtimes.append(int(p.stat().st_mtime))
            except OSError:
                continue
        return max(mtimes) if mtimes else int(datetime.now().timestamp())

    return {
        "version": get_version(),
        "asset_rev": get_asset_rev(),
        "current_year": datetime.now().year,
    }
