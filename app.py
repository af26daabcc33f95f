#!/usr/bin/env python3
"""
Eventbrite Publication - Main Application
Flask app that prints tomorrow's Eventbrite events and tickets
"""

from flask import Flask
import logging

from publication.config import load_project_config
from publication.routes.publication_routes import publication_bp
from publication.utils.format_utils import format_address, format_time_period, format_url, pluralize

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(config_overrides=None):
    """Create and configure Flask app"""
    app = Flask(__name__, template_folder='publication/templates')

    app.config.update(load_project_config())
    if config_overrides:
        app.config.update(config_overrides)

    if not app.config['EVENTBRITE_APPLICATION_KEY']:
        logger.warning("No Eventbrite application key configured")

    app.add_template_global(pluralize)
    app.add_template_global(format_time_period)
    app.add_template_global(format_address)
    app.add_template_global(format_url)

    app.register_blueprint(publication_bp)

    return app

# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8080, debug=True)
