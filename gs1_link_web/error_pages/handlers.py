# /gs1_link_web/error_pages/handlers.py

# Third-party imports
from flask import Blueprint, render_template, request


# Local imports
from gs1_link_web import app, log_message

# blueprint router configuration
error_pages = Blueprint("error_pages", __name__)


@error_pages.app_errorhandler(404)
def error_404(error):
    """Error 404 page handler"""
    incoming_url = request.path
    app.logger.error(log_message(f"404 Error: {error}, URL: {incoming_url}"))
    return render_template("error_pages/404.html"), 404


@error_pages.app_errorhandler(500)
def error_500(error):
    """Error 500 page handler"""
    app.logger.error(log_message(error))
    return render_template("error_pages/500.html"), 500
