# config.py
"""GS1 Link Web - Flask Application configuration."""

# Python imports
from os import environ, path

# Third-party imports
from dotenv import load_dotenv

# Local imports

# Load environment variables from .env file
basedir = path.abspath(path.dirname(__file__))
load_dotenv(path.join(basedir, ".env"))


class Config:
    """Base config."""

    SECRET_KEY = environ.get("SECRET_KEY")

    # Folder for the application log file.
    GS1_LINK_FOLDER = environ.get("GS1_LINK_FOLDER") or path.join(basedir, "gs1_data")
    GS1_LINK_LOG_FILE = (
        environ.get("GS1_LINK_LOG_FILE")
        or path.join(GS1_LINK_FOLDER, "gs1_link_web.log")
    )

    # Pre-filled into the domain field and used when a request omits it.
    GS1_LINK_DEFAULT_DOMAIN = environ.get("GS1_LINK_DEFAULT_DOMAIN") or "https://example.com"

    # QR rendering (L, M, Q or H)
    QR_ERROR_CORRECTION = (environ.get("QR_ERROR_CORRECTION") or "M").upper()
    QR_BOX_SIZE = int(environ.get("QR_BOX_SIZE") or 10)
    QR_BORDER = int(environ.get("QR_BORDER") or 4)


class ProdConfig(Config):
    """Production System Configuration"""

    FLASK_ENV = "production"
    DEBUG = False
    TESTING = False
    


class DevConfig(Config):
    """Development System Configuration"""

    FLASK_ENV = "development"
    DEBUG = True
    TESTING = True
