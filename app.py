# /app.py

from gs1_link_web import app
from gs1_link_web.link_builder.encoder import AIValue, DigitalLinkRequest, LinkError, encode

@app.shell_context_processor
def make_shell_context():
    """Create a shell context for the application - 
    for building GS1 Digital Links by hand in the Flask shell"""
    return {'encode': encode, 'DigitalLinkRequest': DigitalLinkRequest, 'AIValue': AIValue, 'LinkError': LinkError}
